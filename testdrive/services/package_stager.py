"""
Package stager service for testdrive.

Clones each target's repository into a scratch folder, checks out the
resolved revision with its submodules, and hands the clone to project
discovery.

The stager owns the scratch folder for one run. Use it as a context
manager; the folder is deleted when the block exits, whether the run
succeeded or failed:

    with PackageStager() as stager:
        packages = stager.load_packages(targets)

Within a run, repositories are deduplicated by their derived name only:
a second target resolving to an already staged name reuses the first
clone, returns no new package and ignores its own checkout directive.
Two different hosts serving repositories with the same name collide.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional
import logging

from ..domain.target import Target, NamedPackage, CheckoutDirective, LatestRelease
from ..domain.package import StagedRepository, DiscoveredPackage
from ..infra import GitClient
from ..progress import ProgressReporter, get_progress
from ..utils import ensure_repository_suffix, repository_name_from_url
from .checkout_resolver import CheckoutResolver
from .project_discovery import ProjectDiscovery
from .source_locator import SourceLocator

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "TestDriveTemp-"


class PackageStager:
    """
    Stages targets into a scratch folder, one at a time, in order.

    Example:
        with PackageStager() as stager:
            for package in stager.load_packages(targets):
                print(package.name, package.project_path)
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        locator: Optional[SourceLocator] = None,
        resolver: Optional[CheckoutResolver] = None,
        discovery: Optional[ProjectDiscovery] = None,
        progress: Optional[ProgressReporter] = None,
        scratch_parent: Optional[str] = None
    ):
        """
        Initialize PackageStager.

        Args:
            git_client: Git client instance (creates default if None)
            locator: Pod source locator (creates default if None)
            resolver: Checkout resolver (creates default if None)
            discovery: Project discovery (creates default if None)
            progress: Progress reporter (global reporter if None)
            scratch_parent: Where to create the scratch folder (system temp dir if None)
        """
        self.progress = progress or get_progress()
        self.git = git_client or GitClient()
        self.locator = locator or SourceLocator(progress=self.progress)
        self.resolver = resolver or CheckoutResolver(self.git, progress=self.progress)
        self.discovery = discovery or ProjectDiscovery(progress=self.progress)
        self.scratch_parent = scratch_parent
        self.scratch_root: Optional[Path] = None
        self._staged: Dict[str, StagedRepository] = {}

    def __enter__(self) -> 'PackageStager':
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()

    def open(self) -> Path:
        """Create the scratch folder for this run."""
        if self.scratch_root is None:
            self.scratch_root = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=self.scratch_parent))
            logger.debug(f"Created scratch folder {self.scratch_root}")
        return self.scratch_root

    def cleanup(self) -> None:
        """Delete the scratch folder and everything still staged in it."""
        if self.scratch_root is not None:
            shutil.rmtree(self.scratch_root, ignore_errors=True)
            logger.debug(f"Removed scratch folder {self.scratch_root}")
        self.scratch_root = None
        self._staged.clear()

    @property
    def staged(self) -> Dict[str, StagedRepository]:
        """Repositories staged so far in this run, by name."""
        return dict(self._staged)

    def load_packages(self, targets: List[Target]) -> List[DiscoveredPackage]:
        """
        Stage every target in order.

        Reused clones produce no package, so the result can be shorter
        than ``targets``.
        """
        packages = []
        for target in targets:
            package = self.stage(target)
            if package is not None:
                packages.append(package)
        return packages

    def stage(self, target: Target) -> Optional[DiscoveredPackage]:
        """Stage one target, looking up its URL first if it is a pod name."""
        if isinstance(target.kind, NamedPackage):
            url = self.locator.locate(target.kind.name)
        else:
            url = target.kind.url
        return self.stage_url(url, target.directive)

    def stage_url(self, url: str, directive: CheckoutDirective = LatestRelease()) -> Optional[DiscoveredPackage]:
        """
        Clone, check out and discover the repository at ``url``.

        Returns:
            The discovered package, or None if a repository with the same
            name was already staged in this run
        """
        scratch_root = self.open()
        clone_url = ensure_repository_suffix(url)
        name = repository_name_from_url(clone_url)

        if name in self._staged or (scratch_root / name).exists():
            self.progress(f"♻️  Reusing clone of {name}\n")
            return None

        with self.progress.spinner(f"📦  Cloning {clone_url}..."):
            path = self.git.clone(clone_url, name, cwd=scratch_root)

        revision = self.resolver.resolve(directive, url)
        self.progress(f"📋  Checking out {revision.ref}...")
        self.git.checkout(revision.ref, path)
        self.git.update_submodules(path)

        repository = StagedRepository(name=name, path=path, url=clone_url, revision=revision)
        self._staged[name] = repository
        return self.discovery.discover(repository, url)
