"""
Workspace domain object for testdrive.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional

from .target import Platform

WORKSPACE_PREFIX = "TestDrive-"
WORKSPACE_SUFFIX = ".xcworkspace"
PROJECTS_FOLDER = "Projects"
PLAYGROUND_NAME = "Playground"


def workspace_name_for(package_names: List[str]) -> str:
    """Build the workspace name from the display names of its packages."""
    return f"{WORKSPACE_PREFIX}{'-'.join(package_names)}{WORKSPACE_SUFFIX}"


@dataclass(frozen=True)
class Playground:
    """The playground entry of a workspace."""
    name: str = PLAYGROUND_NAME
    platform: Platform = field(default_factory=Platform.default)

    @property
    def filename(self) -> str:
        return f"{self.name}.playground"


@dataclass
class Workspace:
    """
    In-memory description of a generated Xcode workspace.

    Project references are relative to the workspace bundle itself,
    e.g. ``Projects/Unbox/Unbox.xcodeproj``, and kept in target order.
    """
    name: str
    path: Path
    playground: Optional[Playground] = None
    projects: List[str] = field(default_factory=list)

    def add_playground(self, platform: Platform) -> Playground:
        self.playground = Playground(platform=platform)
        return self.playground

    def add_project(self, relative_path: str) -> None:
        self.projects.append(relative_path)

    @property
    def projects_folder(self) -> Path:
        return self.path / PROJECTS_FOLDER

    @property
    def platform(self) -> Platform:
        if self.playground is None:
            return Platform.default()
        return self.playground.platform

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': str(self.path),
            'platform': self.platform.value,
            'projects': list(self.projects),
        }
