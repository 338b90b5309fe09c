from bulkreplace.errors import (
    ConfigurationError,
    FileOperationError,
    InvalidPattern,
    PlatformUnavailable,
    ReplaceError,
    ResolutionError,
)
from bulkreplace.models import (
    ErrorDescription,
    FileResult,
    JobOutcome,
    ReplaceFlags,
    SelectionConfig,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ErrorDescription",
    "FileOperationError",
    "FileResult",
    "InvalidPattern",
    "JobOutcome",
    "PlatformUnavailable",
    "ReplaceError",
    "ReplaceFlags",
    "ResolutionError",
    "SelectionConfig",
]
