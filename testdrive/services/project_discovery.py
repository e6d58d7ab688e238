"""
Project discovery service for testdrive.

Locates the Xcode project to add to the workspace inside a staged
repository. Projects whose names mark them as demos, samples or
examples are never picked. When a repository has no usable project but
ships a Package.swift manifest, a project is generated from it.

The first qualifying project wins. The walk is top-down and visits
siblings in sorted order, so a project at the repository root is found
before nested ones; repositories with several qualifying projects still
depend on that order.
"""

import os
from pathlib import Path
from typing import Iterator, Optional
import logging

from ..domain.package import StagedRepository, DiscoveredPackage
from ..exit_codes import MissingXcodeProjectError
from ..infra import SwiftPackageClient
from ..progress import ProgressReporter, get_progress

logger = logging.getLogger(__name__)

PROJECT_EXTENSION = ".xcodeproj"
EXCLUDED_NAME_PARTS = ("demo", "sample", "example")


def is_valid_xcode_project(path: Path) -> bool:
    """Check whether a directory is a project that is not a demo, sample or example."""
    if path.suffix != PROJECT_EXTENSION:
        return False

    lowercased_name = path.name.lower()
    return not any(part in lowercased_name for part in EXCLUDED_NAME_PARTS)


def iter_project_candidates(root: Path) -> Iterator[Path]:
    """
    Yield directories under ``root`` in discovery order.

    Hidden directories (``.git`` and friends) are skipped, and project
    bundles are not descended into.
    """
    for current, dirs, _ in os.walk(root):
        dirs[:] = sorted(d for d in dirs if not d.startswith('.'))
        for name in dirs:
            yield Path(current) / name
        dirs[:] = [d for d in dirs if not d.endswith(PROJECT_EXTENSION)]


def find_xcode_project(root: Path) -> Optional[Path]:
    """Return the first valid Xcode project under ``root``, if any."""
    for candidate in iter_project_candidates(root):
        if is_valid_xcode_project(candidate):
            return candidate
    return None


class ProjectDiscovery:
    """
    Finds or generates the buildable project of a staged repository.

    Example:
        discovery = ProjectDiscovery()
        package = discovery.discover(repository, url)
        print(package.project_path)   # e.g. Unbox/Unbox.xcodeproj
    """

    def __init__(
        self,
        swift_client: Optional[SwiftPackageClient] = None,
        progress: Optional[ProgressReporter] = None
    ):
        self.swift = swift_client or SwiftPackageClient()
        self.progress = progress or get_progress()

    def discover(self, repository: StagedRepository, url: str) -> DiscoveredPackage:
        """
        Discover the project unit of a staged repository.

        Args:
            repository: The staged clone
            url: URL the repository was requested with, for error messages

        Returns:
            DiscoveredPackage with a path relative to the repository's parent

        Raises:
            MissingXcodeProjectError: If there is neither a project nor a manifest
        """
        project = find_xcode_project(repository.path)
        if project is not None:
            package = DiscoveredPackage(
                name=project.stem,
                repository=repository,
                project_path=project.relative_to(repository.path.parent).as_posix(),
            )
            self.progress.success(f"🚗  {package.name} is ready for test drive\n")
            return package

        if self.swift.has_manifest(repository.path):
            project_name = f"{repository.name}{PROJECT_EXTENSION}"
            logger.debug(f"Generating {project_name} from Package.swift")
            self.swift.generate_xcodeproj(repository.path, project_name)
            package = DiscoveredPackage(
                name=repository.name,
                repository=repository,
                project_path=f"{repository.name}/{project_name}",
                generated=True,
            )
            self.progress.success(f"🚗  {package.name} is ready for test drive\n")
            return package

        raise MissingXcodeProjectError(url)
