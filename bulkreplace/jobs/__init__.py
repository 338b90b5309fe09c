from .loader import Job, JobFile

__all__ = ["Job", "JobFile"]
