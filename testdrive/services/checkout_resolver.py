"""
Checkout resolver service for testdrive.

Decides which revision of a freshly cloned repository to check out.
Precedence is fixed: an explicit ref always wins, then the default
branch when asked for, and otherwise the latest release, degrading to
the default branch when the repository has no version tags.
"""

from typing import List, Optional
import logging

from packaging.version import Version, InvalidVersion

from ..domain.target import CheckoutDirective, Explicit, DefaultBranch
from ..domain.package import ResolvedRevision, RevisionPolicy
from ..infra import GitClient
from ..progress import ProgressReporter, get_progress

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "master"


def latest_version_tag(tags: List[str]) -> Optional[str]:
    """
    Pick the highest version among tag names.

    Tags that are not versions (``nightly``, ``swift3``) are ignored.
    Sorting uses version precedence, so ``1.10.0`` beats ``1.9.0``.

    Returns:
        The tag name as listed (``v2.0.0`` keeps its prefix), or None
    """
    versions = []
    for tag in tags:
        try:
            versions.append((Version(tag), tag))
        except InvalidVersion:
            logger.debug(f"Ignoring non-version tag {tag}")

    if not versions:
        return None

    versions.sort(key=lambda pair: pair[0])
    return versions[-1][1]


class CheckoutResolver:
    """
    Turns checkout directives into concrete refs.

    Example:
        resolver = CheckoutResolver()
        revision = resolver.resolve(LatestRelease(), "https://github.com/johnsundell/unbox")
        print(revision.ref)
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        default_branch: str = DEFAULT_BRANCH,
        progress: Optional[ProgressReporter] = None
    ):
        self.git = git_client or GitClient()
        self.default_branch = default_branch
        self.progress = progress or get_progress()

    def resolve(self, directive: CheckoutDirective, url: str) -> ResolvedRevision:
        """
        Resolve a directive for the repository at ``url``.

        Explicit refs are returned verbatim and never validated; a bad ref
        surfaces later as a checkout failure.
        """
        if isinstance(directive, Explicit):
            return ResolvedRevision(directive.ref, RevisionPolicy.EXPLICIT)

        if isinstance(directive, DefaultBranch):
            return ResolvedRevision(self.default_branch, RevisionPolicy.BRANCH)

        self.progress("🚢  Resolving latest version...")
        latest = latest_version_tag(self.git.remote_tags(url))
        if latest is None:
            logger.debug(f"No releases for {url}, using {self.default_branch}")
            return ResolvedRevision(self.default_branch, RevisionPolicy.BRANCH_FALLBACK)

        return ResolvedRevision(latest, RevisionPolicy.LATEST_RELEASE)
