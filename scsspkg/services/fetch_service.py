"""
Fetches a clean shallow copy of the upstream release.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..exit_codes import CloneError, ScratchPathError
from ..infra.git_client import GitClient, GitError
from ..progress import Task

logger = logging.getLogger(__name__)


def reset_scratch_dir(path: Path, status: Optional[Task] = None) -> bool:
    """
    Delete a previous run's scratch directory.

    A symlink to a directory is removed as a link; its target is left alone.

    Returns:
        True if a directory was removed

    Raises:
        ScratchPathError: If the path exists but is not a directory, or
            removing it fails
    """
    if not path.exists() and not path.is_symlink():
        return False
    if not path.is_dir():
        raise ScratchPathError(path)

    if status:
        status.update("Deleting old clone")
    logger.debug(f"Removing {path}")
    try:
        if path.is_symlink():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as e:
        raise ScratchPathError(path, f"Failed to remove temp dir at {path}: {e}") from e
    return True


def fetch_release(
    git: GitClient,
    url: str,
    tag: str,
    dest: Path,
    status: Optional[Task] = None,
) -> None:
    """
    Shallow, single-branch clone of one tag.

    Raises:
        CloneError: If git fails (network, auth, unknown tag)
    """
    if status:
        status.update(f"Cloning {url}")
    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        git.clone(url, dest, branch=tag, depth=1)
    except GitError as e:
        raise CloneError(f"Failed to clone {url} at {tag}: {e}") from e
