"""
CocoaPods client infrastructure for testdrive.

Wraps ``pod search`` so the source locator can be tested without
CocoaPods installed.
"""

import shlex
import logging
from typing import Optional

from ..utils import run_external

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_COMMAND = "pod search {name} --simple"


class PodClient:
    """Runs the CocoaPods search tool and returns its plain-text report."""

    def __init__(self, search_command: Optional[str] = None):
        """
        Args:
            search_command: Command template with a ``{name}`` placeholder
        """
        self.search_command = search_command or DEFAULT_SEARCH_COMMAND

    def search(self, name: str) -> str:
        """Search the CocoaPods repositories for a pod name."""
        command = [part.replace("{name}", name) for part in shlex.split(self.search_command)]
        logger.debug(f"Searching pods: {shlex.join(command)}")
        return run_external(command)
