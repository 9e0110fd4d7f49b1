"""
Stages the publishable package directory from an upstream clone.

The style directory is copied verbatim. The core directory is prune-copied:
only stylesheets under the plugin subtree are kept, and a directory is kept
only if some descendant at any depth is kept.
"""

import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Optional, Union

from ..domain.layout import StagingLayout
from ..exit_codes import StagingError
from ..progress import Task

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def is_plugin_stylesheet(
    path: PathLike,
    repo_root: PathLike,
    plugin_dir: str,
    suffix: str = "css",
) -> bool:
    """
    Check whether a file is a stylesheet inside the plugin subtree.

    The path relative to repo_root must start with the components of
    plugin_dir, and the file name must end with suffix. With the default
    suffix both '.css' and '.scss' files qualify.
    """
    try:
        rel = Path(path).relative_to(repo_root)
    except ValueError:
        return False
    plugin_parts = PurePosixPath(plugin_dir).parts
    if rel.parts[:len(plugin_parts)] != plugin_parts:
        return False
    return rel.name.endswith(suffix)


def contains_plugin_stylesheet(
    directory: PathLike,
    repo_root: PathLike,
    plugin_dir: str,
    suffix: str = "css",
    cache: Optional[Dict[Path, bool]] = None,
) -> bool:
    """
    Check whether a directory holds a plugin stylesheet at any depth.

    Args:
        cache: Optional per-run memo of directory -> result
    """
    directory = Path(directory)
    if cache is not None and directory in cache:
        return cache[directory]

    found = False
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            found = contains_plugin_stylesheet(entry, repo_root, plugin_dir, suffix, cache)
        else:
            found = is_plugin_stylesheet(entry, repo_root, plugin_dir, suffix)
        if found:
            break

    if cache is not None:
        cache[directory] = found
    return found


def plugin_stylesheet_filter(
    repo_root: PathLike,
    plugin_dir: str,
    suffix: str = "css",
) -> Callable[[str, List[str]], List[str]]:
    """
    Build a shutil.copytree ignore callable for the prune-copy.

    Files are kept if they are plugin stylesheets; directories are kept if
    they contain one at any depth. Everything else is ignored.
    """
    cache: Dict[Path, bool] = {}

    def ignore(directory: str, names: List[str]) -> List[str]:
        ignored = []
        for name in names:
            path = Path(directory) / name
            if path.is_dir():
                keep = contains_plugin_stylesheet(path, repo_root, plugin_dir, suffix, cache)
            else:
                keep = is_plugin_stylesheet(path, repo_root, plugin_dir, suffix)
            if not keep:
                ignored.append(name)
        if ignored:
            logger.debug(f"Pruned {len(ignored)} entries from {directory}")
        return ignored

    return ignore


def prune_copy(
    src: Path,
    dst: Path,
    repo_root: Path,
    plugin_dir: str,
    suffix: str = "css",
) -> bool:
    """
    Copy src to dst keeping only plugin stylesheets and their ancestors.

    Returns:
        False if src has no plugin stylesheet (nothing is created)
    """
    if not contains_plugin_stylesheet(src, repo_root, plugin_dir, suffix):
        logger.debug(f"No stylesheets under {src}, skipping")
        return False

    shutil.copytree(
        src,
        dst,
        ignore=plugin_stylesheet_filter(repo_root, plugin_dir, suffix),
        dirs_exist_ok=False
    )
    return True


def stage_package(layout: StagingLayout, status: Optional[Task] = None) -> Path:
    """
    Create the staged package directory from the upstream clone.

    The staging directory must not exist yet; previous contents are never
    merged.

    Returns:
        Path of the staging directory

    Raises:
        StagingError: If any copy fails
    """
    def step(message: str):
        if status:
            status.update(message)

    upstream = layout.upstream_dir
    staging = layout.staging_dir

    try:
        staging.mkdir()
    except FileExistsError as e:
        raise StagingError(f"Staging directory {staging} already exists") from e
    except OSError as e:
        raise StagingError(f"Failed to create {staging}: {e}") from e

    try:
        step("Copying SCSS files")
        shutil.copytree(upstream / layout.style_dir, staging / 'style')

        step("Copying core dependencies")
        prune_copy(
            upstream / layout.core_dir,
            staging / 'core',
            repo_root=upstream,
            plugin_dir=layout.plugin_dir,
            suffix=layout.stylesheet_suffix,
        )

        step(f"Copying {layout.license_file}")
        shutil.copy2(upstream / layout.license_file, staging / layout.license_file)

        step(f"Copying {layout.security_file}")
        shutil.copy2(upstream / layout.security_file, staging / layout.security_file)

        step(f"Copying {layout.readme.name}")
        shutil.copy2(layout.readme, layout.staged_readme)
    except OSError as e:
        raise StagingError(f"Failed to stage package: {e}") from e

    return staging
