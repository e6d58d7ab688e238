"""Tests for the run summary output."""

from io import StringIO
from pathlib import Path
from unittest.mock import patch

from rich.console import Console

from testdrive.domain import (
    DiscoveredPackage,
    Platform,
    ResolvedRevision,
    RevisionPolicy,
    StagedRepository,
    Workspace,
)
from testdrive.render import render_package_table, print_test_drive_summary


def make_package(name, policy=RevisionPolicy.LATEST_RELEASE, ref="1.2.0", generated=False):
    repository = StagedRepository(
        name=name,
        path=Path(f"/tmp/scratch/{name}"),
        url=f"https://example.com/{name}.git",
        revision=ResolvedRevision(ref, policy),
    )
    return DiscoveredPackage(name, repository, f"{name}/{name}.xcodeproj", generated=generated)


def make_workspace(platform=Platform.IOS):
    workspace = Workspace(name="TestDrive-Alpha.xcworkspace", path=Path("/tmp/TestDrive-Alpha.xcworkspace"))
    workspace.add_playground(platform)
    return workspace


def capture():
    return Console(file=StringIO(), width=160, color_system=None)


class TestRenderPackageTable:
    """Tests for the staged package table."""

    def test_table_rows(self):
        console = capture()
        with patch('testdrive.render.console', console):
            render_package_table([make_package("Alpha")], make_workspace(Platform.TVOS))

        output = console.file.getvalue()
        assert "TestDrive-Alpha.xcworkspace" in output
        assert "Alpha/Alpha.xcodeproj" in output
        assert "1.2.0" in output
        assert "Platform: tvOS" in output

    def test_fallback_and_generated_are_marked(self):
        console = capture()
        package = make_package("Files", RevisionPolicy.BRANCH_FALLBACK, "master", generated=True)
        with patch('testdrive.render.console', console):
            render_package_table([package], make_workspace())

        output = console.file.getvalue()
        assert "master (no releases)" in output
        assert "(generated)" in output

    def test_empty(self):
        console = capture()
        with patch('testdrive.render.console', console):
            render_package_table([], make_workspace())
        assert "No packages staged." in console.file.getvalue()


def test_summary_joins_names():
    console = capture()
    with patch('testdrive.render.console', console):
        print_test_drive_summary([make_package("Unbox"), make_package("Wrap")])
    assert "Test driving Unbox + Wrap" in console.file.getvalue()
