"""
Standard exit codes for scsspkg commands.

Every handled abort exits with GENERAL_ERROR, including the "nothing to
publish" outcome, so that CI jobs chained on success do not publish.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors and handled aborts
NOTHING_TO_PUBLISH = 1   # Published version already matches upstream
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class NoValidTagError(CommandError):
    """Raised when the upstream remote has no strict vX.Y.Z release tag."""
    def __init__(self, message: str = "No valid release tag found upstream"):
        super().__init__(message)


class VersionRegressionError(CommandError):
    """Raised when the published version is newer than the upstream tag."""
    def __init__(self, upstream: str, published: str):
        super().__init__(
            f"Version in the git repository ({upstream}) is lower than the "
            f"version in npm ({published}), no publishing required"
        )
        self.upstream = upstream
        self.published = published


class ScratchPathError(CommandError):
    """Raised when the scratch path is not a directory or cannot be removed."""
    def __init__(self, path, message: Optional[str] = None):
        super().__init__(message or f"Existing temp dir at {path} is not a directory")
        self.path = path


class CloneError(CommandError):
    """Raised when cloning the upstream repository fails."""


class StagingError(CommandError):
    """Raised when a file or directory cannot be copied into the staged package."""


class ManifestError(CommandError):
    """Raised when the upstream manifest cannot be read or the new one written."""


class InstallError(CommandError):
    """Raised when the package manager install fails."""
    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
