"""
Runs the package manager install inside the staged package.

Output of the child process is forwarded live to the caller's streams: one
pump thread per pipe, both draining while the process is awaited.
"""

import logging
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, List, Optional

from ..exit_codes import InstallError

logger = logging.getLogger(__name__)


def _pump(source: IO[bytes], sink: IO[str]) -> None:
    """
    Copy lines from a child pipe to a stream until EOF.

    Bytes go straight to the sink's binary buffer when it has one, so
    output that is not valid text is forwarded untouched. Plain text
    sinks get the line decoded with replacement characters.
    """
    target = getattr(sink, 'buffer', None)
    try:
        for line in iter(source.readline, b''):
            if target is not None:
                sink.flush()
                target.write(line)
                target.flush()
            else:
                sink.write(line.decode('utf-8', errors='replace'))
                sink.flush()
    finally:
        source.close()


def install_dependencies(
    cwd: Path,
    command: List[str],
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> None:
    """
    Run an install command in cwd, streaming its output.

    Args:
        cwd: Staged package directory
        command: Install command, e.g. ['npm', 'install']
        stdout: Stream for the child's stdout (default: sys.stdout)
        stderr: Stream for the child's stderr (default: sys.stderr)

    Raises:
        InstallError: If the command cannot be started or exits non-zero
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    logger.debug(f"Running command in '{cwd}': {' '.join(command)}")
    try:
        process = subprocess.Popen(
            command,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        raise InstallError(f"Failed to run {' '.join(command)}: {e}") from e

    pumps = [
        threading.Thread(target=_pump, args=(process.stdout, stdout), daemon=True),
        threading.Thread(target=_pump, args=(process.stderr, stderr), daemon=True),
    ]
    for pump in pumps:
        pump.start()

    returncode = process.wait()
    for pump in pumps:
        pump.join()

    if returncode != 0:
        raise InstallError(
            f"Failed to install dependencies, exited with status {returncode}",
            returncode=returncode,
        )
