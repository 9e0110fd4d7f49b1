"""
Handles the 'check' command: resolve and gate without touching the disk.
"""

import click
from pathlib import Path

from ..cli_utils import standard_command, add_common_options
from ..pipeline import Publisher


@click.command("check")
@add_common_options('verbose', 'quiet', 'pretty', 'workdir')
@standard_command
def check_handler(verbose, quiet, pretty, workdir, progress=None, config=None):
    """Report whether a publish is needed.

    Same version checks as 'publish', without cloning or staging.
    Exits 0 if upstream is newer, 1 if the published version is current
    or ahead.
    """
    publisher = Publisher(config=config, reporter=progress, cwd=Path(workdir) if workdir else None)
    return publisher.check()
