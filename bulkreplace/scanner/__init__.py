from .resolve import PathResolver

__all__ = ["PathResolver"]
