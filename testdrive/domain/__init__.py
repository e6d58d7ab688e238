"""
Domain layer for testdrive.

Contains pure domain objects with no I/O or side effects:
- Target: A requested package (pod name or repository URL) and its checkout directive
- StagedRepository / DiscoveredPackage: What staging produced for a target
- Workspace: The generated workspace and its project references

These objects are immutable where possible and provide
serialization methods for output.
"""

from .target import (
    Target,
    NamedPackage,
    RepositoryURL,
    LatestRelease,
    DefaultBranch,
    Explicit,
    Platform,
)
from .package import RevisionPolicy, ResolvedRevision, StagedRepository, DiscoveredPackage
from .workspace import Workspace, Playground

__all__ = [
    'Target',
    'NamedPackage',
    'RepositoryURL',
    'LatestRelease',
    'DefaultBranch',
    'Explicit',
    'Platform',
    'RevisionPolicy',
    'ResolvedRevision',
    'StagedRepository',
    'DiscoveredPackage',
    'Workspace',
    'Playground',
]
