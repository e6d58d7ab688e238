"""
Source locator service for testdrive.

Finds the source repository of a pod by scanning the plain-text report
of ``pod search --simple``, which looks like:

    -> Unbox (4.0.0)
       The easy to use Swift JSON decoder
       pod 'Unbox', '~> 4.0.0'
       - Homepage: https://github.com/johnsundell/unbox
       - Source:   https://github.com/johnsundell/unbox.git
       - Versions: 4.0.0, 3.0.0 [master repo]
"""

from typing import Optional
import logging
import re

from ..exit_codes import InvalidPodNameError, InvalidPodSourceURLError
from ..infra import PodClient
from ..progress import ProgressReporter, get_progress
from ..utils import is_valid_url

logger = logging.getLogger(__name__)

HEADING_MARKER = "-> "
SOURCE_MARKER = "- source:"

_SOURCE_RE = re.compile(re.escape(SOURCE_MARKER), re.IGNORECASE)


def find_source_url(name: str, report: str) -> str:
    """
    Extract the source URL of a pod from a search report.

    The scan is a single pass: first look for the heading line of the pod,
    then take the first source line after it.

    Args:
        name: Pod name, matched case-insensitively
        report: Search output

    Returns:
        The source URL

    Raises:
        InvalidPodSourceURLError: If the source field is not a URL
        InvalidPodNameError: If there is no entry for the pod
    """
    heading = f"{HEADING_MARKER}{name.lower()} "
    found_pod = False

    for line in report.splitlines():
        if not found_pod:
            found_pod = heading in line.lower()
            continue

        parts = _SOURCE_RE.split(line, maxsplit=1)
        if len(parts) < 2:
            continue

        # Matching ignores case, the URL keeps its own
        source = parts[1].strip()
        if not is_valid_url(source):
            raise InvalidPodSourceURLError(source)
        return source

    raise InvalidPodNameError(name)


class SourceLocator:
    """
    Resolves pod names to repository URLs.

    Example:
        locator = SourceLocator()
        url = locator.locate("Unbox")
    """

    def __init__(
        self,
        pod_client: Optional[PodClient] = None,
        progress: Optional[ProgressReporter] = None
    ):
        self.pods = pod_client or PodClient()
        self.progress = progress or get_progress()

    def locate(self, name: str) -> str:
        """Find the source repository URL of a pod."""
        self.progress(f"🕵️‍♀️  Finding pod '{name}'...")

        name = name.lower()
        report = self.pods.search(name)
        url = find_source_url(name, report)
        logger.debug(f"Pod '{name}' has source {url}")
        return url
