"""
Infrastructure layer for testdrive.

Contains abstractions for external tools:
- GitClient: clone, checkout, submodules and remote tag listing
- PodClient: CocoaPods search
- SwiftPackageClient: Xcode project generation from Package.swift
- WorkspaceWriter: Xcode workspace and playground files

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .pod_client import PodClient
from .swift_package import SwiftPackageClient
from .workspace_writer import WorkspaceWriter

__all__ = [
    'GitClient',
    'PodClient',
    'SwiftPackageClient',
    'WorkspaceWriter',
]
