"""
Service layer for testdrive.

Contains the resolution and staging pipeline:
- SourceLocator: Pod name to repository URL
- CheckoutResolver: Checkout directive to concrete ref
- PackageStager: Clone, check out and deduplicate repositories
- ProjectDiscovery: Find or generate the Xcode project of a clone
- WorkspaceAssembler: Combine packages into one workspace

Services coordinate the domain objects and the infrastructure clients.
"""

from .source_locator import SourceLocator
from .checkout_resolver import CheckoutResolver
from .project_discovery import ProjectDiscovery
from .package_stager import PackageStager
from .workspace_assembler import WorkspaceAssembler

__all__ = [
    'SourceLocator',
    'CheckoutResolver',
    'ProjectDiscovery',
    'PackageStager',
    'WorkspaceAssembler',
]
