"""
Swift Package Manager client infrastructure for testdrive.

Used only as a fallback, when a repository has a Package.swift manifest
but no Xcode project to add to the workspace.
"""

from pathlib import Path
from typing import Union

from ..utils import run_external

MANIFEST_FILENAME = "Package.swift"


class SwiftPackageClient:
    """Generates Xcode projects from Swift package manifests."""

    def has_manifest(self, path: Union[str, Path]) -> bool:
        """Check for a manifest at the root of a package."""
        return (Path(path) / MANIFEST_FILENAME).is_file()

    def generate_xcodeproj(self, path: Union[str, Path], output: str) -> Path:
        """
        Generate an Xcode project for the package at ``path``.

        Args:
            path: Package root containing Package.swift
            output: Project bundle name, e.g. ``Files.xcodeproj``

        Returns:
            Path to the generated project bundle
        """
        run_external(["swift", "package", "generate-xcodeproj", "--output", output], cwd=str(path))
        return Path(path) / output
