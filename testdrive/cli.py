#!/usr/bin/env python3

import json
import logging

import click

from testdrive.api import TestDrive
from testdrive.arguments import parse_arguments
from testdrive.cli_utils import standard_command, add_common_options
from testdrive.config import load_config, configure_logging
from testdrive.render import render_package_table, print_test_drive_summary

logger = logging.getLogger(__name__)

USAGE = """🚘  Test Drive
--------------
Quickly try out any Swift pod or framework in a playground.

Usage:
- Simply pass a list of pod names or URLs that you want to test drive.
- You can also specify a platform (iOS, macOS or tvOS) using the '-p' option
- To use a specific version or branch, use the '-v' argument (or '-m' for master)

Examples:
- testdrive Unbox Wrap Files
- testdrive https://github.com/johnsundell/unbox.git Wrap Files
- testdrive Unbox -p tvOS
- testdrive Unbox -v 2.3.0
- testdrive Unbox -v swift3"""


def print_help():
    click.echo(USAGE)


@click.command(
    "testdrive",
    context_settings={"ignore_unknown_options": True, "help_option_names": ["-h", "--help"]},
    add_help_option=True,
)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@add_common_options('no_open', 'output_dir', 'json', 'config', 'verbose')
@standard_command
def cli(tokens, no_open, output_dir, as_json, config_path, verbose, progress, **kwargs):
    """Quickly try out any Swift pod or framework in a playground.

    \b
    TOKENS are pod names or repository URLs, mixed with:
      -p, --platform NAME   playground platform (iOS, macOS or tvOS)
      -v, --version REF     check out REF for the preceding target
      -m, --master          check out master for the preceding target
    """
    config = load_config(config_path)
    configure_logging(config, verbose)

    arguments = parse_arguments(tokens)
    if not arguments.targets:
        print_help()
        return

    test_drive = TestDrive(
        config=config,
        output_directory=output_dir,
        open_workspace=False if no_open else None,
        progress=progress,
    )
    result = test_drive.run(arguments.targets, arguments.platform)

    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False), flush=True)
        return

    # The run is complete here, output problems are only logged
    try:
        render_package_table(result.packages, result.workspace)
        print_test_drive_summary(result.packages)
    except Exception:
        logger.debug("Could not render the run summary", exc_info=True)


def main():
    cli()

if __name__ == "__main__":
    main()
