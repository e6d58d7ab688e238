"""
Staging domain objects for testdrive.

These describe what the package stager produced for one target:
the revision it picked, the clone it made in the scratch area, and
the buildable project it found inside that clone.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional


class RevisionPolicy(Enum):
    """How a checkout revision was chosen."""
    EXPLICIT = "explicit"
    BRANCH = "branch"
    LATEST_RELEASE = "latest"
    BRANCH_FALLBACK = "branch-fallback"


@dataclass(frozen=True)
class ResolvedRevision:
    """A concrete ref to check out and the policy that produced it."""
    ref: str
    policy: RevisionPolicy

    def __str__(self) -> str:
        return self.ref

    def to_dict(self) -> Dict[str, Any]:
        return {'ref': self.ref, 'policy': self.policy.value}


@dataclass(frozen=True)
class StagedRepository:
    """A repository cloned into the scratch area and checked out."""
    name: str
    path: Path
    url: str
    revision: Optional[ResolvedRevision] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': str(self.path),
            'url': self.url,
            'revision': self.revision.to_dict() if self.revision else None,
        }


@dataclass(frozen=True)
class DiscoveredPackage:
    """
    The buildable unit found for one target.

    project_path is relative to the parent of the staged repository,
    e.g. ``Unbox/Unbox.xcodeproj``, so it stays valid once the repository
    has been moved under the workspace's Projects folder.
    """
    name: str
    repository: StagedRepository
    project_path: str
    generated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'project_path': self.project_path,
            'generated': self.generated,
            'repository': self.repository.to_dict(),
        }
