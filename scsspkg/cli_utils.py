"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from .config import load_config, set_log_level
from .domain.release import RunDecision, RunResult
from .progress import get_progress
from .exit_codes import (
    SUCCESS, GENERAL_ERROR, INTERRUPTED, NOTHING_TO_PUBLISH, CommandError
)
from .render import render_result_table


def exit_code_for(result: RunResult) -> int:
    """Exit code for a finished run: the no-op outcome is not a success."""
    if result.decision is RunDecision.NO_OP:
        return NOTHING_TO_PUBLISH
    return SUCCESS


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Status reporting on stderr
    - One JSON object (or a --pretty table) on stdout
    - Loads the configuration and passes it as config=
    - --verbose turns on progress and debug logging
    - --quiet suppresses data output
    - Consistent error handling and exit codes
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        verbose = kwargs.get('verbose', False)
        quiet = kwargs.get('quiet', False)
        pretty = kwargs.get('pretty', False)

        config = load_config(kwargs.get('workdir'))
        set_log_level('DEBUG' if verbose else config.get('logging', {}).get('level', 'INFO'))
        progress = get_progress(enabled=verbose or None)
        kwargs['progress'] = progress
        kwargs['config'] = config

        try:
            result = func(*args, **kwargs)
        except KeyboardInterrupt:
            progress.error("Interrupted by user")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except CommandError as e:
            if not getattr(e, "reported", False):
                progress.error(str(e))
            if not quiet:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": e.exit_code
                }
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(e.exit_code)
        except Exception as e:
            progress.error(f"Command failed: {e}")
            if not quiet:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__
                }
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(GENERAL_ERROR)

        if result is None:
            sys.exit(SUCCESS)

        if not quiet:
            if pretty:
                render_result_table(result.to_dict())
            else:
                print(json.dumps(result.to_dict(), ensure_ascii=False), flush=True)

        sys.exit(exit_code_for(result))

    return wrapper


# Standard options that commands share
common_options = {
    'verbose': click.option('-v', '--verbose', is_flag=True,
                           help='Force progress output and debug logging'),
    'quiet': click.option('-q', '--quiet', is_flag=True,
                         help='Suppress data output, show only progress'),
    'pretty': click.option('--pretty', is_flag=True,
                          help='Display the result as a table'),
    'workdir': click.option('-C', '--workdir', type=click.Path(file_okay=False, path_type=str),
                           default=None,
                           help="Directory holding the scratch dir, README and scsspkg.* config (default: cwd)"),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('verbose', 'quiet')
        def my_command(verbose, quiet):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
