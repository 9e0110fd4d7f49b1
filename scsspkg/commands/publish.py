"""
Handles the 'publish' command: the full repackaging run.
"""

import click
from pathlib import Path

from ..cli_utils import standard_command, add_common_options
from ..pipeline import Publisher


@click.command("publish")
@add_common_options('verbose', 'quiet', 'pretty', 'workdir')
@standard_command
def publish_handler(verbose, quiet, pretty, workdir, progress=None, config=None):
    """Stage a new package if upstream has a newer release.

    Resolves the latest vX.Y.Z tag of the upstream repository, compares it
    with the version published on npm and, if it is newer, clones the
    release, stages the style assets and plugin stylesheets, writes a new
    package.json and installs dependencies.

    Exits 1 when the published version is already up to date.

    \b
    Examples:
        scsspkg publish
        scsspkg publish --pretty -C /path/to/checkout
    """
    publisher = Publisher(config=config, reporter=progress, cwd=Path(workdir) if workdir else None)
    return publisher.run()
