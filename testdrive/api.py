"""
High-level Python API for testdrive.

Example:
    from testdrive import TestDrive
    from testdrive.arguments import parse_arguments

    arguments = parse_arguments(["Unbox", "-v", "2.5.0", "Wrap", "-p", "tvOS"])
    result = TestDrive().run(arguments.targets, arguments.platform)
    print(result.workspace.path)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from .config import load_config
from .domain import DiscoveredPackage, Platform, Target, Workspace
from .domain.target import platform_or_default
from .infra import GitClient, PodClient, SwiftPackageClient, WorkspaceWriter
from .progress import ProgressReporter, get_progress
from .services import (
    CheckoutResolver,
    PackageStager,
    ProjectDiscovery,
    SourceLocator,
    WorkspaceAssembler,
)

logger = logging.getLogger(__name__)


@dataclass
class TestDriveResult:
    """Outcome of a successful run."""
    __test__ = False

    workspace: Workspace
    packages: List[DiscoveredPackage] = field(default_factory=list)

    @property
    def package_names(self) -> List[str]:
        return [package.name for package in self.packages]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'workspace': self.workspace.to_dict(),
            'packages': [package.to_dict() for package in self.packages],
        }


class TestDrive:
    """
    Stages targets and assembles them into a workspace.

    Example:
        td = TestDrive(output_directory="~/Desktop", open_workspace=False)
        result = td.run([Target(NamedPackage("Unbox"))])
    """

    # Keep pytest from collecting this class
    __test__ = False

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        output_directory: Optional[str] = None,
        open_workspace: Optional[bool] = None,
        git_client: Optional[GitClient] = None,
        pod_client: Optional[PodClient] = None,
        swift_client: Optional[SwiftPackageClient] = None,
        writer: Optional[WorkspaceWriter] = None,
        progress: Optional[ProgressReporter] = None,
        scratch_parent: Optional[str] = None
    ):
        """
        Initialize TestDrive.

        Args:
            config: Full config dict (loads from file if None)
            output_directory: Where to create the workspace (overrides config)
            open_workspace: Open the workspace when done (overrides config)
            git_client: Git client instance (creates default if None)
            pod_client: CocoaPods client instance (creates default if None)
            swift_client: SwiftPM client instance (creates default if None)
            writer: Workspace writer instance (creates default if None)
            progress: Progress reporter (global reporter if None)
            scratch_parent: Where to create the scratch folder (system temp dir if None)
        """
        self.config = config if config is not None else load_config()
        workspace_config = self.config.get('workspace', {})

        self.output_directory = output_directory or workspace_config.get('output_directory', '.')
        if open_workspace is None:
            open_workspace = bool(workspace_config.get('open_after_generate', True))
        self.open_workspace = open_workspace

        self.progress = progress or get_progress()
        self.git = git_client or GitClient()
        self.pods = pod_client or PodClient(self.config.get('search', {}).get('command'))
        self.swift = swift_client or SwiftPackageClient()
        self.writer = writer or WorkspaceWriter(workspace_config.get('open_command', 'open'))
        self.scratch_parent = scratch_parent

    @property
    def default_platform(self) -> Platform:
        return platform_or_default(self.config.get('workspace', {}).get('default_platform'))

    def create_stager(self) -> PackageStager:
        """Create a stager wired to this instance's clients."""
        default_branch = self.config.get('checkout', {}).get('default_branch', 'master')
        return PackageStager(
            git_client=self.git,
            locator=SourceLocator(self.pods, progress=self.progress),
            resolver=CheckoutResolver(self.git, default_branch=default_branch, progress=self.progress),
            discovery=ProjectDiscovery(self.swift, progress=self.progress),
            progress=self.progress,
            scratch_parent=self.scratch_parent,
        )

    def create_assembler(self) -> WorkspaceAssembler:
        return WorkspaceAssembler(self.output_directory, writer=self.writer, progress=self.progress)

    def run(self, targets: List[Target], platform: Optional[Platform] = None) -> TestDriveResult:
        """
        Stage all targets and generate their workspace.

        Errors abort the run. The scratch folder is removed on every exit path.

        Args:
            targets: Targets in the order they were requested
            platform: Playground platform (config default if None)

        Returns:
            TestDriveResult with the workspace and its packages
        """
        platform = platform or self.default_platform

        with self.create_stager() as stager:
            packages = stager.load_packages(targets)

            assembler = self.create_assembler()
            workspace = assembler.assemble(packages, platform)
            assembler.generate(workspace)

            if self.open_workspace:
                assembler.open(workspace)
            else:
                logger.debug(f"Not opening {workspace.path}")

        return TestDriveResult(workspace=workspace, packages=packages)
