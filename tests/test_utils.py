"""
Unit tests for testdrive.utils module
"""
import os
import unittest
import tempfile
import subprocess

from testdrive.exit_codes import ExternalCommandError, GENERAL_ERROR
from testdrive.utils import (
    run_command,
    run_external,
    is_valid_url,
    ensure_repository_suffix,
    repository_name_from_url,
    canonical_hosting_url,
)


class TestRunCommand(unittest.TestCase):
    """Test the run_command utility function

    Note: run_command returns the stripped stdout and raises
    CalledProcessError on a non-zero exit.
    """

    def test_run_command_output(self):
        """Test run_command returns stripped stdout"""
        self.assertEqual(run_command(["echo", "test"]), "test")

    def test_run_command_empty_output(self):
        """Test run_command with a silent command"""
        self.assertEqual(run_command(["true"]), "")

    def test_run_command_failure_raises(self):
        """Test run_command raises on a non-zero exit"""
        with self.assertRaises(subprocess.CalledProcessError) as ctx:
            run_command(["false"])
        self.assertEqual(ctx.exception.returncode, 1)

    def test_run_command_with_cwd(self):
        """Test run_command with different working directory"""
        with tempfile.TemporaryDirectory() as temp_dir:
            output = run_command(["pwd"], cwd=temp_dir)
            self.assertEqual(os.path.realpath(output), os.path.realpath(temp_dir))


class TestRunExternal(unittest.TestCase):
    """Test failures of external tools"""

    def test_output(self):
        self.assertEqual(run_external(["echo", "hello"]), "hello")

    def test_non_zero_exit(self):
        with self.assertRaises(ExternalCommandError) as ctx:
            run_external(["false"])
        self.assertEqual(ctx.exception.returncode, 1)
        self.assertEqual(ctx.exception.exit_code, GENERAL_ERROR)
        self.assertIn("Command failed (1): false", str(ctx.exception))

    def test_missing_tool(self):
        with self.assertRaises(ExternalCommandError) as ctx:
            run_external(["testdrive-no-such-tool-xyz", "--help"])
        self.assertEqual(ctx.exception.returncode, 127)


class TestURLHelpers(unittest.TestCase):
    """Test repository URL helpers"""

    def test_valid_urls(self):
        for url in (
            "https://github.com/johnsundell/unbox.git",
            "ssh://git@example.com/owner/repo.git",
            "git@github.com:johnsundell/unbox.git",
            "file:///tmp/repos/Alpha.git",
            "/tmp/repos/Alpha.git",
            "Beta.git",
            "repos/Beta.git",
            "../repos/Beta.git",
            "~/src/Beta.git",
        ):
            self.assertTrue(is_valid_url(url), url)

    def test_invalid_urls(self):
        for text in ("", "not a url", "tab\there.git", "bell\x07.git", "https://"):
            self.assertFalse(is_valid_url(text), text)

    def test_ensure_repository_suffix(self):
        self.assertEqual(ensure_repository_suffix("https://github.com/a/b"), "https://github.com/a/b.git")
        self.assertEqual(ensure_repository_suffix("https://github.com/a/b.git"), "https://github.com/a/b.git")
        self.assertEqual(ensure_repository_suffix("https://github.com/a/b/"), "https://github.com/a/b.git")

    def test_repository_name_from_url(self):
        self.assertEqual(repository_name_from_url("https://github.com/johnsundell/Unbox.git"), "Unbox")
        self.assertEqual(repository_name_from_url("https://github.com/johnsundell/unbox"), "unbox")
        self.assertEqual(repository_name_from_url("git@example.com:Beta.git"), "Beta")

    def test_canonical_hosting_url(self):
        self.assertEqual(canonical_hosting_url("github.com/johnsundell/unbox"), "https://github.com/johnsundell/unbox")
        self.assertEqual(canonical_hosting_url("www.github.com/a/b"), "https://github.com/a/b")


if __name__ == '__main__':
    unittest.main()
