from .dialog import DirectorySelector, TkDirectorySelector

__all__ = ["DirectorySelector", "TkDirectorySelector"]
