"""Tests for the domain layer."""

from pathlib import Path

import pytest

from testdrive.domain import (
    Target,
    NamedPackage,
    LatestRelease,
    DefaultBranch,
    Explicit,
    Platform,
    RevisionPolicy,
    ResolvedRevision,
    StagedRepository,
    DiscoveredPackage,
    Workspace,
)
from testdrive.domain.target import platform_or_default
from testdrive.domain.workspace import workspace_name_for
from testdrive.exit_codes import InvalidPlatformError, USAGE_ERROR


class TestTarget:
    """Tests for Target domain object."""

    def test_default_directive_is_latest_release(self):
        target = Target(NamedPackage("Unbox"))
        assert target.directive == LatestRelease()

    def test_with_directive_returns_copy(self):
        target = Target(NamedPackage("Unbox"))
        pinned = target.with_directive(Explicit("2.3.0"))

        assert pinned.directive == Explicit("2.3.0")
        assert pinned.kind == target.kind
        assert target.directive == LatestRelease()

    def test_equality(self):
        assert Target(NamedPackage("Wrap"), DefaultBranch()) == Target(NamedPackage("Wrap"), DefaultBranch())
        assert Target(NamedPackage("Wrap")) != Target(NamedPackage("Wrap"), DefaultBranch())


class TestPlatform:
    """Tests for Platform enum."""

    @pytest.mark.parametrize("text,expected", [
        ("iOS", Platform.IOS),
        ("ios", Platform.IOS),
        ("MACOS", Platform.MACOS),
        ("tvOS", Platform.TVOS),
    ])
    def test_parse_is_case_insensitive(self, text, expected):
        assert Platform.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(InvalidPlatformError) as exc_info:
            Platform.parse("watchOS")
        assert str(exc_info.value) == "Invalid platform given: 'watchOS'"
        assert exc_info.value.exit_code == USAGE_ERROR

    def test_default_is_first_platform(self):
        assert Platform.default() is Platform.IOS

    def test_display_name(self):
        assert Platform.MACOS.display_name == "macOS"
        assert Platform.TVOS.display_name == "tvOS"

    def test_framework(self):
        assert Platform.IOS.framework == "UIKit"
        assert Platform.TVOS.framework == "UIKit"
        assert Platform.MACOS.framework == "Cocoa"

    def test_platform_or_default(self):
        assert platform_or_default(None) is Platform.IOS
        assert platform_or_default("") is Platform.IOS
        assert platform_or_default("tvos") is Platform.TVOS


class TestStaging:
    """Tests for staging domain objects."""

    def test_resolved_revision_str(self):
        revision = ResolvedRevision("1.2.0", RevisionPolicy.LATEST_RELEASE)
        assert str(revision) == "1.2.0"
        assert revision.to_dict() == {'ref': '1.2.0', 'policy': 'latest'}

    def test_discovered_package_to_dict(self):
        repository = StagedRepository(
            name="Alpha",
            path=Path("/tmp/scratch/Alpha"),
            url="https://example.com/Alpha.git",
            revision=ResolvedRevision("master", RevisionPolicy.BRANCH_FALLBACK),
        )
        package = DiscoveredPackage("Alpha", repository, "Alpha/Alpha.xcodeproj")

        data = package.to_dict()
        assert data['project_path'] == "Alpha/Alpha.xcodeproj"
        assert data['generated'] is False
        assert data['repository']['revision'] == {'ref': 'master', 'policy': 'branch-fallback'}


class TestWorkspace:
    """Tests for Workspace domain object."""

    def test_name_single_package(self):
        assert workspace_name_for(["Alpha"]) == "TestDrive-Alpha.xcworkspace"

    def test_name_joins_packages_in_order(self):
        assert workspace_name_for(["Unbox", "Wrap", "Files"]) == "TestDrive-Unbox-Wrap-Files.xcworkspace"

    def test_projects_keep_order(self):
        workspace = Workspace(name="TestDrive-A-B.xcworkspace", path=Path("/tmp/TestDrive-A-B.xcworkspace"))
        workspace.add_project("Projects/A/A.xcodeproj")
        workspace.add_project("Projects/B/B.xcodeproj")

        assert workspace.projects == ["Projects/A/A.xcodeproj", "Projects/B/B.xcodeproj"]
        assert workspace.projects_folder == Path("/tmp/TestDrive-A-B.xcworkspace/Projects")

    def test_playground(self):
        workspace = Workspace(name="TestDrive-A.xcworkspace", path=Path("/tmp/TestDrive-A.xcworkspace"))
        assert workspace.platform is Platform.IOS

        playground = workspace.add_playground(Platform.TVOS)
        assert playground.filename == "Playground.playground"
        assert workspace.platform is Platform.TVOS
        assert workspace.to_dict()['platform'] == "tvos"
