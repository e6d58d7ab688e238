"""
testdrive - Quickly try out any Swift pod or framework in a playground.

testdrive resolves pod names and repository URLs into local clones,
checks out the right revision of each, finds their Xcode projects and
combines them into one generated workspace with a playground.

Quick Start:
    from testdrive import TestDrive, parse_arguments

    arguments = parse_arguments(["Unbox", "Wrap", "-v", "3.0.0", "-p", "macOS"])
    result = TestDrive(open_workspace=False).run(arguments.targets, arguments.platform)
    print(result.workspace.path)

Domain Objects:
    Target - A pod name or repository URL with its checkout directive
    DiscoveredPackage - The Xcode project found for a target
    Workspace - The generated workspace

Services:
    SourceLocator - Pod name to repository URL
    CheckoutResolver - Checkout directive to ref
    PackageStager - Cloning, checkout and deduplication
    ProjectDiscovery - Finding or generating the Xcode project
    WorkspaceAssembler - Building the workspace
"""

__version__ = "0.3.0"

# High-level API
from .api import TestDrive, TestDriveResult
from .arguments import Arguments, parse_arguments

# Domain objects
from .domain import (
    Target,
    NamedPackage,
    RepositoryURL,
    LatestRelease,
    DefaultBranch,
    Explicit,
    Platform,
    ResolvedRevision,
    StagedRepository,
    DiscoveredPackage,
    Workspace,
)

# Services (for advanced use)
from .services import (
    SourceLocator,
    CheckoutResolver,
    PackageStager,
    ProjectDiscovery,
    WorkspaceAssembler,
)

# Configuration
from .config import load_config

__all__ = [
    # Version
    "__version__",
    # High-level API
    "TestDrive",
    "TestDriveResult",
    "Arguments",
    "parse_arguments",
    # Domain objects
    "Target",
    "NamedPackage",
    "RepositoryURL",
    "LatestRelease",
    "DefaultBranch",
    "Explicit",
    "Platform",
    "ResolvedRevision",
    "StagedRepository",
    "DiscoveredPackage",
    "Workspace",
    # Services
    "SourceLocator",
    "CheckoutResolver",
    "PackageStager",
    "ProjectDiscovery",
    "WorkspaceAssembler",
    # Configuration
    "load_config",
]
