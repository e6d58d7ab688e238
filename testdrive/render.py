"""
Rendering functions for testdrive output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List

from .domain import DiscoveredPackage, RevisionPolicy, Workspace

console = Console()


def render_package_table(packages: List[DiscoveredPackage], workspace: Workspace) -> None:
    """
    Render the staged packages of a run as a pretty table.

    Args:
        packages: Discovered packages, in target order
        workspace: The generated workspace
    """
    if not packages:
        console.print("[yellow]No packages staged.[/yellow]")
        return

    table = Table(
        title=workspace.name,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("Package", style="cyan")
    table.add_column("Revision", style="yellow")
    table.add_column("Project", style="dim")
    table.add_column("Source", style="dim")

    for package in packages:
        revision = package.repository.revision
        revision_str = revision.ref if revision else ""
        if revision is not None and revision.policy is RevisionPolicy.BRANCH_FALLBACK:
            revision_str += " (no releases)"

        project = package.project_path
        if package.generated:
            project += " (generated)"

        table.add_row(
            package.name,
            revision_str,
            project,
            package.repository.url
        )

    console.print(table)
    console.print(f"[dim]Platform: {workspace.platform.display_name}[/dim]")


def print_test_drive_summary(packages: List[DiscoveredPackage]) -> None:
    """Print the closing line of a run."""
    names = " + ".join(package.name for package in packages)
    console.print(f"\n🚘  Test driving {names}", highlight=False)
