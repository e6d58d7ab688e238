"""
Standard exit codes and error types for testdrive.

Following Unix/POSIX conventions for command-line tools. Every error
raised while resolving or staging targets is fatal for the whole run.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NOT_FOUND = 64           # Pod or project could not be found
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Data format or validation error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': GENERAL_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': CONFIG_ERROR,
    'TOMLDecodeError': CONFIG_ERROR,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class InvalidURLError(CommandError):
    """Raised when a token meant as a repository URL cannot be parsed."""
    def __init__(self, url: str):
        super().__init__(f"Invalid URL given: '{url}'", USAGE_ERROR)
        self.url = url


class MissingPlatformError(CommandError):
    """Raised when the platform flag is the last argument."""
    def __init__(self, flag: str = "-p"):
        super().__init__(f"Missing platform after flag '{flag}'", USAGE_ERROR)


class InvalidPlatformError(CommandError):
    """Raised when the platform flag names an unknown platform."""
    def __init__(self, platform: str):
        super().__init__(f"Invalid platform given: '{platform}'", USAGE_ERROR)
        self.platform = platform


class MissingXcodeProjectError(CommandError):
    """Raised when a staged repository has neither a project nor a manifest."""
    def __init__(self, url: str):
        super().__init__(f"Xcode project missing at '{url}'", DATA_ERROR)
        self.url = url


class InvalidPodNameError(CommandError):
    """Raised when the pod search output has no entry for the name."""
    def __init__(self, name: str):
        super().__init__(f"Cannot find a pod named '{name}'", NOT_FOUND)
        self.name = name


class InvalidPodSourceURLError(CommandError):
    """Raised when the source field of a pod is not a usable URL."""
    def __init__(self, url: str):
        super().__init__(f"Pod source URL is invalid: '{url}'", DATA_ERROR)
        self.url = url


class ExternalCommandError(CommandError):
    """Raised when git, pod, swift or open exits with a non-zero status."""
    def __init__(self, command: str, returncode: int, stderr: Optional[str] = None):
        message = f"Command failed ({returncode}): {command}"
        if stderr and stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message, GENERAL_ERROR)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
