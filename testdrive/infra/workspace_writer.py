"""
Xcode workspace writer for testdrive.

Materializes an in-memory Workspace on disk:

    TestDrive-Unbox.xcworkspace/
        contents.xcworkspacedata
        Playground.playground/
            contents.xcplayground
            Contents.swift
        Projects/
            Unbox/Unbox.xcodeproj

File references use ``group:`` locations, which Xcode resolves relative
to the folder containing the workspace bundle.
"""

import shlex
import logging
from pathlib import Path
from typing import List, Union
from xml.sax.saxutils import quoteattr

from ..domain.workspace import Workspace, Playground
from ..utils import run_external

logger = logging.getLogger(__name__)

WORKSPACE_DATA_FILENAME = "contents.xcworkspacedata"
PLAYGROUND_DATA_FILENAME = "contents.xcplayground"
PLAYGROUND_SOURCE_FILENAME = "Contents.swift"
DEFAULT_OPEN_COMMAND = "open"


def render_workspace_data(workspace: Workspace) -> str:
    """Render contents.xcworkspacedata for a workspace."""
    locations: List[str] = []
    if workspace.playground is not None:
        locations.append(workspace.playground.filename)
    locations.extend(workspace.projects)

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<Workspace',
        '   version = "1.0">',
    ]
    for location in locations:
        lines.extend([
            '   <FileRef',
            f'      location = {quoteattr(f"group:{workspace.name}/{location}")}>',
            '   </FileRef>',
        ])
    lines.append('</Workspace>')
    return "\n".join(lines) + "\n"


def render_playground_data(playground: Playground) -> str:
    """Render contents.xcplayground for a playground."""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f"<playground version='5.0' target-platform='{playground.platform.value}'>\n"
        "    <timeline fileName='timeline.xctimeline'/>\n"
        "</playground>\n"
    )


def render_playground_source(playground: Playground) -> str:
    """Render the starting code of a playground."""
    return f'import {playground.platform.framework}\n\nvar str = "Hello, playground"\n'


class WorkspaceWriter:
    """Writes workspaces to disk and opens them in the default tool."""

    def __init__(self, open_command: str = DEFAULT_OPEN_COMMAND):
        self.open_command = open_command

    def write(self, workspace: Workspace) -> Path:
        """
        Write the workspace data and its playground.

        Returns:
            Path to the workspace bundle
        """
        workspace.path.mkdir(parents=True, exist_ok=True)
        (workspace.path / WORKSPACE_DATA_FILENAME).write_text(
            render_workspace_data(workspace), encoding='utf-8'
        )

        if workspace.playground is not None:
            playground_path = workspace.path / workspace.playground.filename
            playground_path.mkdir(parents=True, exist_ok=True)
            (playground_path / PLAYGROUND_DATA_FILENAME).write_text(
                render_playground_data(workspace.playground), encoding='utf-8'
            )
            (playground_path / PLAYGROUND_SOURCE_FILENAME).write_text(
                render_playground_source(workspace.playground), encoding='utf-8'
            )

        logger.debug(f"Wrote workspace {workspace.path} with {len(workspace.projects)} projects")
        return workspace.path

    def open(self, path: Union[str, Path]) -> None:
        """Open a workspace with the configured command."""
        run_external([*shlex.split(self.open_command), str(path)])
