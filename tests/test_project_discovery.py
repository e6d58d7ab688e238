"""
Tests for Xcode project discovery
"""
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from testdrive.domain import StagedRepository
from testdrive.exit_codes import MissingXcodeProjectError, DATA_ERROR
from testdrive.infra import SwiftPackageClient
from testdrive.progress import ProgressReporter
from testdrive.services.project_discovery import (
    ProjectDiscovery,
    find_xcode_project,
    is_valid_xcode_project,
)

URL = "https://example.com/owner/Alpha.git"


class TestIsValidXcodeProject(unittest.TestCase):
    """Test project name filtering"""

    def test_plain_project(self):
        self.assertTrue(is_valid_xcode_project(Path("Alpha.xcodeproj")))

    def test_excluded_names(self):
        for name in ("AlphaDemo.xcodeproj", "Sample.xcodeproj", "Examples.xcodeproj", "ExampleDemo.xcodeproj"):
            self.assertFalse(is_valid_xcode_project(Path(name)), name)

    def test_exclusion_ignores_case(self):
        self.assertFalse(is_valid_xcode_project(Path("DEMOAPP.xcodeproj")))

    def test_other_extension(self):
        self.assertFalse(is_valid_xcode_project(Path("Alpha.xcworkspace")))
        self.assertFalse(is_valid_xcode_project(Path("Alpha")))


class DiscoveryTestCase(unittest.TestCase):
    """Base class creating a staged repository on disk"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.repo_path = Path(self.temp_dir) / "Alpha"
        self.repo_path.mkdir()
        self.repository = StagedRepository(name="Alpha", path=self.repo_path, url=URL)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def make_dir(self, relative):
        path = self.repo_path / relative
        path.mkdir(parents=True)
        return path


class TestFindXcodeProject(DiscoveryTestCase):
    """Test walking a repository for projects"""

    def test_root_project(self):
        self.make_dir("Alpha.xcodeproj")
        self.assertEqual(find_xcode_project(self.repo_path), self.repo_path / "Alpha.xcodeproj")

    def test_nested_project(self):
        self.make_dir("Sources/Alpha")
        self.make_dir("Build/Alpha.xcodeproj")
        self.assertEqual(find_xcode_project(self.repo_path), self.repo_path / "Build" / "Alpha.xcodeproj")

    def test_root_project_before_nested(self):
        self.make_dir("Alpha.xcodeproj")
        self.make_dir("Aaa/Other.xcodeproj")
        self.assertEqual(find_xcode_project(self.repo_path), self.repo_path / "Alpha.xcodeproj")

    def test_demo_projects_skipped(self):
        self.make_dir("AlphaDemo.xcodeproj")
        self.make_dir("Framework/Alpha.xcodeproj")
        self.assertEqual(find_xcode_project(self.repo_path), self.repo_path / "Framework" / "Alpha.xcodeproj")

    def test_hidden_directories_skipped(self):
        self.make_dir(".build/Hidden.xcodeproj")
        self.assertIsNone(find_xcode_project(self.repo_path))

    def test_project_bundles_not_descended(self):
        self.make_dir("AlphaDemo.xcodeproj/Inner.xcodeproj")
        self.assertIsNone(find_xcode_project(self.repo_path))

    def test_nothing_found(self):
        self.make_dir("Sources")
        self.assertIsNone(find_xcode_project(self.repo_path))


class TestProjectDiscovery(DiscoveryTestCase):
    """Test the ProjectDiscovery service"""

    def setUp(self):
        super().setUp()
        self.swift = SwiftPackageClient()
        self.discovery = ProjectDiscovery(self.swift, progress=ProgressReporter(enabled=False, use_colors=False))

    def test_discover_existing_project(self):
        self.make_dir("Alpha.xcodeproj")

        package = self.discovery.discover(self.repository, URL)

        self.assertEqual(package.name, "Alpha")
        self.assertEqual(package.project_path, "Alpha/Alpha.xcodeproj")
        self.assertFalse(package.generated)
        self.assertIs(package.repository, self.repository)

    def test_package_name_is_project_name(self):
        self.make_dir("Xcode/AlphaKit.xcodeproj")

        package = self.discovery.discover(self.repository, URL)

        self.assertEqual(package.name, "AlphaKit")
        self.assertEqual(package.project_path, "Alpha/Xcode/AlphaKit.xcodeproj")

    def test_generates_project_from_manifest(self):
        self.make_dir("ExampleDemo.xcodeproj")
        (self.repo_path / "Package.swift").write_text("// swift-tools-version:5.0\n")

        with patch.object(self.swift, 'generate_xcodeproj') as mock_generate:
            package = self.discovery.discover(self.repository, URL)

        mock_generate.assert_called_once_with(self.repo_path, "Alpha.xcodeproj")
        self.assertEqual(package.name, "Alpha")
        self.assertEqual(package.project_path, "Alpha/Alpha.xcodeproj")
        self.assertTrue(package.generated)

    def test_missing_project(self):
        self.make_dir("AlphaDemo.xcodeproj")

        with self.assertRaises(MissingXcodeProjectError) as ctx:
            self.discovery.discover(self.repository, URL)

        self.assertEqual(str(ctx.exception), f"Xcode project missing at '{URL}'")
        self.assertEqual(ctx.exception.exit_code, DATA_ERROR)


class TestSwiftPackageClient(unittest.TestCase):
    """Test the SwiftPM fallback command"""

    @patch('testdrive.infra.swift_package.run_external', return_value="")
    def test_generate_xcodeproj(self, mock_run):
        path = SwiftPackageClient().generate_xcodeproj(Path("/tmp/Files"), "Files.xcodeproj")

        self.assertEqual(path, Path("/tmp/Files/Files.xcodeproj"))
        mock_run.assert_called_once_with(
            ["swift", "package", "generate-xcodeproj", "--output", "Files.xcodeproj"],
            cwd="/tmp/Files",
        )


if __name__ == '__main__':
    unittest.main()
