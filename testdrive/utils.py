"""
Shared utility functions for testdrive.
"""
import re
import shlex
import subprocess
from urllib.parse import urlparse

from .config import logger
from .exit_codes import ExternalCommandError

REPOSITORY_SUFFIX = ".git"
HOSTING_DOMAIN = "github.com/"

# scp-like git remotes, e.g. git@github.com:owner/repo.git
_SCP_URL_RE = re.compile(r"^[\w.\-]+@[\w.\-]+:[^\s]+$")


def run_command(command, cwd="."):
    """
    Runs a command and logs its output.

    Args:
        command (list): Command and arguments, run without a shell.
        cwd (str): The working directory.

    Returns:
        str: The command's stripped stdout.

    Raises:
        subprocess.CalledProcessError: If the command exits non-zero.
        OSError: If the command cannot be started.
    """
    logger.debug(f"Running command in '{cwd}': {shlex.join(command)}")
    result = subprocess.run(
        command,
        capture_output=True,
        text=True,
        cwd=str(cwd),
        check=False,  # Disable check here to handle output manually
        encoding='utf-8'
    )

    if result.stdout and result.stdout.strip():
        logger.debug(result.stdout.strip())

    # Log stderr only if the command failed
    if result.returncode != 0:
        if result.stderr and result.stderr.strip():
            logger.error(result.stderr.strip())
        raise subprocess.CalledProcessError(
            result.returncode, command, output=result.stdout, stderr=result.stderr
        )

    return result.stdout.strip()


def run_external(command, cwd="."):
    """
    Run an external tool and return its output, failing the run on error.

    Args:
        command (list): Command and arguments
        cwd (str): The working directory

    Returns:
        str: The command's stdout

    Raises:
        ExternalCommandError: If the tool is missing or exits non-zero
    """
    try:
        return run_command(command, cwd=cwd)
    except subprocess.CalledProcessError as e:
        raise ExternalCommandError(shlex.join(command), e.returncode, e.stderr) from e
    except OSError as e:
        raise ExternalCommandError(shlex.join(command), 127, str(e)) from e


def is_valid_url(text):
    """
    Check whether text can be used as a repository URL.

    Anything git can clone from is accepted: ``scheme://host/path`` URLs,
    scp-like ``user@host:path`` remotes and local paths, relative or not.
    Empty text, text with whitespace or control characters, and scheme
    URLs without a host are rejected.

    Args:
        text (str): Candidate URL

    Returns:
        bool: True if the text is a usable URL
    """
    if not text or any(ch.isspace() or not ch.isprintable() for ch in text):
        return False

    if _SCP_URL_RE.match(text) or "://" not in text:
        return True

    try:
        parsed = urlparse(text)
    except ValueError:
        return False

    if parsed.scheme == "file":
        return bool(parsed.path)
    return bool(parsed.scheme and parsed.netloc)


def ensure_repository_suffix(url):
    """Append the .git suffix to a repository URL if it is missing."""
    url = url.rstrip("/")
    if url.endswith(REPOSITORY_SUFFIX):
        return url
    return url + REPOSITORY_SUFFIX


def repository_name_from_url(url):
    """
    Derive the local folder name of a repository from its URL.

    The last path segment is used with the .git suffix stripped, so
    https://github.com/johnsundell/unbox.git becomes ``unbox``.

    Args:
        url (str): Repository URL, with or without the .git suffix

    Returns:
        str: Repository name
    """
    segment = ensure_repository_suffix(url).split("/")[-1]
    # scp-like remotes without a path separator, e.g. git@host:repo.git
    segment = segment.split(":")[-1]
    return segment[:-len(REPOSITORY_SUFFIX)]


def canonical_hosting_url(text):
    """
    Rewrite a hosting-domain web URL into its canonical https form.

    Args:
        text (str): Token containing ``github.com/``

    Returns:
        str: ``https://github.com/<owner>/<repo>``
    """
    rest = text.split(HOSTING_DOMAIN, 1)[1]
    return f"https://{HOSTING_DOMAIN}{rest}"
