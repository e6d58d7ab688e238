"""
Workspace assembler service for testdrive.

Combines the discovered packages of a run into one Xcode workspace with
a playground. Staged repositories are moved (not copied) out of the
scratch folder into the workspace's Projects folder.
"""

import shutil
from pathlib import Path
from typing import List, Optional, Union
import logging

from ..domain.package import DiscoveredPackage
from ..domain.target import Platform
from ..domain.workspace import Workspace, PROJECTS_FOLDER, workspace_name_for
from ..infra import WorkspaceWriter
from ..progress import ProgressReporter, get_progress

logger = logging.getLogger(__name__)


def empty_folder(path: Path) -> None:
    """Delete everything inside a folder, keeping the folder itself."""
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


class WorkspaceAssembler:
    """
    Builds, writes and opens the test drive workspace.

    Example:
        assembler = WorkspaceAssembler(output_directory=".")
        workspace = assembler.assemble(packages, Platform.IOS)
        assembler.generate(workspace)
        assembler.open(workspace)
    """

    def __init__(
        self,
        output_directory: Union[str, Path] = ".",
        writer: Optional[WorkspaceWriter] = None,
        progress: Optional[ProgressReporter] = None
    ):
        self.output_directory = Path(output_directory).expanduser()
        self.writer = writer or WorkspaceWriter()
        self.progress = progress or get_progress()

    def assemble(self, packages: List[DiscoveredPackage], platform: Optional[Platform] = None) -> Workspace:
        """
        Create the workspace folder and move every package into it.

        Any existing Projects folder of a workspace with the same name is
        emptied first.

        Args:
            packages: Discovered packages, in target order
            platform: Playground platform (first platform if None)

        Returns:
            The workspace description, ready to be generated
        """
        name = workspace_name_for([package.name for package in packages])
        workspace = Workspace(name=name, path=(self.output_directory / name).absolute())
        workspace.add_playground(platform or Platform.default())

        projects_folder = workspace.projects_folder
        projects_folder.mkdir(parents=True, exist_ok=True)
        empty_folder(projects_folder)

        for package in packages:
            shutil.move(str(package.repository.path), str(projects_folder))
            workspace.add_project(f"{PROJECTS_FOLDER}/{package.project_path}")
            logger.debug(f"Moved {package.repository.name} into {projects_folder}")

        return workspace

    def generate(self, workspace: Workspace) -> Path:
        """Write the workspace to disk."""
        self.progress(f"⚡️  Generating workspace at {workspace.path}...")
        return self.writer.write(workspace)

    def open(self, workspace: Workspace) -> None:
        """Open the workspace in the default tool."""
        self.writer.open(workspace.path)
