"""
Progress reporting utilities for testdrive.

Step messages (finding a pod, cloning, checking out, generating the
workspace) go to stderr so that stdout only carries the run summary.
"""

import sys
import os
from typing import Optional
import time
import signal
import threading

from .exit_codes import INTERRUPTED

COLORS = {
    'reset': '\033[0m',
    'red': '\033[31m',
    'green': '\033[32m',
    'cyan': '\033[36m',
}


class ProgressReporter:
    """Prints step messages to stderr while keeping stdout clean for the summary."""

    spinner_frames = ['-', '\\', '|', '/']

    def __init__(self, enabled: Optional[bool] = None, use_colors: Optional[bool] = None):
        """
        Args:
            enabled: Show step messages. None shows them when stderr is a terminal
            use_colors: Use ANSI colors. None uses them on a terminal unless NO_COLOR is set
        """
        is_tty = sys.stderr.isatty()
        self.enabled = is_tty if enabled is None else enabled
        if use_colors is None:
            use_colors = is_tty and os.environ.get('NO_COLOR') is None
        self.use_colors = use_colors

        # Ctrl+C exits through SystemExit so the scratch folder is still purged
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, self._handle_interrupt)

    def _handle_interrupt(self, signum, frame):
        if self.enabled:
            print("\n\nInterrupted by user", file=sys.stderr, flush=True)
        sys.exit(INTERRUPTED)

    def _colorize(self, text: str, color: Optional[str]) -> str:
        if self.use_colors and color in COLORS:
            return f"{COLORS[color]}{text}{COLORS['reset']}"
        return text

    def __call__(self, message: str, color: Optional[str] = None):
        """Print a step message if enabled."""
        if self.enabled:
            print(self._colorize(message, color), file=sys.stderr, flush=True)

    def error(self, message: str):
        """Always output errors to stderr."""
        print(self._colorize(f"ERROR: {message}", 'red'), file=sys.stderr, flush=True)

    def success(self, message: str):
        self(message, color='green')

    def spinner(self, message: str) -> 'Spinner':
        """Create a spinner for long-running steps such as clones."""
        return Spinner(self, message)


# Global progress reporter instance
_progress = None


def get_progress(enabled: Optional[bool] = None) -> ProgressReporter:
    """
    Get the global progress reporter.

    Args:
        enabled: Override auto-detection of progress display

    Returns:
        ProgressReporter instance
    """
    global _progress
    if _progress is None or enabled is not None:
        _progress = ProgressReporter(enabled)
    return _progress


# Environment variable override
if os.environ.get('TESTDRIVE_PROGRESS') == '0':
    _progress = ProgressReporter(enabled=False)
elif os.environ.get('TESTDRIVE_PROGRESS') == '1':
    _progress = ProgressReporter(enabled=True)


class Spinner:
    """Animated spinner on a terminal, a plain message elsewhere."""

    def __init__(self, reporter: ProgressReporter, message: str):
        self.reporter = reporter
        self.message = message
        self.thread = None
        self.running = False

    def __enter__(self):
        if self.reporter.enabled and sys.stderr.isatty():
            self.running = True
            self.thread = threading.Thread(target=self._spin, daemon=True)
            self.thread.start()
        else:
            self.reporter(self.message)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.running = False
        if self.thread:
            self.thread.join()
            # Clear the spinner line, then leave the message in place
            print('\r' + ' ' * (len(self.message) + 10) + '\r', end='', file=sys.stderr, flush=True)
            self.reporter(self.message)

    def _spin(self):
        while self.running:
            for char in self.reporter.spinner_frames:
                if not self.running:
                    break
                frame = self.reporter._colorize(char, 'cyan') + f" {self.message}"
                print(f"\r{frame}", end='', file=sys.stderr, flush=True)
                time.sleep(0.1)
