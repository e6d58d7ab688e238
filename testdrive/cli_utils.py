"""
Common CLI utilities and decorators for consistent command behavior.
"""

import sys
import logging
import click
from functools import wraps
from .progress import get_progress
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)

logger = logging.getLogger(__name__)

FAILURE_MARKER = "💥"


def report_failure(error: Exception) -> None:
    """Print a failed run's error to stdout with the failure marker."""
    click.echo(f"\n{FAILURE_MARKER}  {error}")


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Progress reporting on stderr, forced on by --verbose
    - One top-level handler for every error of a run
    - Exit codes from testdrive.exit_codes

    Errors are never retried; the first one ends the run.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        verbose = kwargs.get('verbose', False)

        # Initialize progress reporter
        progress = get_progress(enabled=True if verbose else None)
        kwargs['progress'] = progress

        try:
            func(*args, **kwargs)
            sys.exit(SUCCESS)
        except KeyboardInterrupt:
            progress.error("Interrupted by user")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            report_failure(e)
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Unexpected error", exc_info=True)
            report_failure(e)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


# Standard options that commands share
common_options = {
    'verbose': click.option('--verbose', is_flag=True,
                            help='Show progress and debug logging'),
    'no_open': click.option('--no-open', is_flag=True,
                            help='Generate the workspace without opening it'),
    'output_dir': click.option('--output-dir', type=click.Path(file_okay=False),
                               help='Directory to create the workspace in (default: from config, or .)'),
    'json': click.option('--json', 'as_json', is_flag=True,
                         help='Print the run result as JSON instead of a table'),
    'config': click.option('--config', 'config_path', type=click.Path(dir_okay=False),
                           help='Configuration file (default: ~/.testdrive/config.json)'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('verbose', 'no_open')
        def my_command(verbose, no_open):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
