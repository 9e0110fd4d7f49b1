#!/usr/bin/env python3

import click

from scsspkg.commands.publish import publish_handler
from scsspkg.commands.check import check_handler
from scsspkg.commands.config import config_cmd


@click.group()
@click.version_option(package_name="scsspkg")
def cli():
    """scsspkg - Repackage swagger-ui stylesheets as a standalone npm package.

    Watches the upstream swagger-ui releases and stages a new
    @createiq/swagger-ui-scss package whenever upstream is ahead of npm.
    """
    pass


cli.add_command(publish_handler)
cli.add_command(check_handler)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
