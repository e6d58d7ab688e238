"""
Git client infrastructure for testdrive.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic

Every command blocks until git exits. A non-zero exit raises
ExternalCommandError, which aborts the whole run.
"""

from pathlib import Path
from typing import List, Union
import logging

from ..utils import run_external

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"
PEELED_SUFFIX = "^{}"


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        client.clone("https://github.com/johnsundell/unbox.git", "unbox", cwd="/tmp/scratch")
        client.checkout("2.5.0", "/tmp/scratch/unbox")
    """

    def _run(self, args: List[str], cwd: Union[str, Path] = ".") -> str:
        """
        Run a git command.

        Args:
            args: Arguments following ``git``
            cwd: Working directory

        Returns:
            Command stdout
        """
        return run_external(["git", *args], cwd=str(cwd))

    def clone(self, url: str, name: str, cwd: Union[str, Path]) -> Path:
        """
        Quietly clone a repository into ``cwd/name``.

        Returns:
            Path to the new clone
        """
        self._run(["clone", url, name, "--quiet"], cwd=cwd)
        return Path(cwd) / name

    def checkout(self, ref: str, path: Union[str, Path]) -> None:
        """Check out a tag, branch or commit."""
        self._run(["checkout", ref, "--quiet"], cwd=path)

    def update_submodules(self, path: Union[str, Path]) -> None:
        """Initialize and update all submodules, recursively."""
        self._run(["submodule", "update", "--init", "--recursive", "--quiet"], cwd=path)

    def remote_tags(self, url: str) -> List[str]:
        """
        List the tag names of a remote repository without cloning it.

        Annotated tags appear twice in ``git ls-remote`` output (the tag and
        its peeled commit); each name is returned once, in listing order.

        Args:
            url: Remote repository URL

        Returns:
            Tag names such as ``1.2.0`` or ``v2.0.0``
        """
        output = self._run(["ls-remote", "--tags", url])

        tags = []
        seen = set()
        for line in output.splitlines():
            if '\t' not in line:
                continue
            ref = line.split('\t', 1)[1].strip()
            if not ref.startswith(TAG_REF_PREFIX):
                continue
            name = ref[len(TAG_REF_PREFIX):]
            if name.endswith(PEELED_SUFFIX):
                name = name[:-len(PEELED_SUFFIX)]
            if name and name not in seen:
                seen.add(name)
                tags.append(name)

        logger.debug(f"Found {len(tags)} tags for {url}")
        return tags
