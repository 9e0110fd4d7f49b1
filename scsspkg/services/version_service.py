"""
Version resolution for scsspkg.

Finds the highest plain release tag (vX.Y.Z) on the upstream remote.
"""

import logging
import re
from typing import Iterable, List, Optional

from ..domain.release import TagReference, is_release_tag
from ..exit_codes import NoValidTagError
from ..infra.git_client import GitClient, GitError

logger = logging.getLogger(__name__)

_REF_PREFIX_RE = re.compile(r"^.*refs/tags/")


def parse_tag_refs(text: str) -> List[str]:
    """
    Extract tag names from 'git ls-remote --tags' output.

    Everything up to and including the last 'refs/tags/' is dropped, so
    '<sha>\\trefs/tags/v5.2.0' becomes 'v5.2.0'. Blank lines are skipped.
    """
    return [
        _REF_PREFIX_RE.sub('', line)
        for line in text.splitlines()
        if line.strip()
    ]


def select_latest_tag(names: Iterable[str]) -> Optional[TagReference]:
    """
    Pick the highest release tag from a list of tag names.

    Non-release tags are discarded first. The remote's sort order is only a
    hint: the maximum by version ordering wins regardless of position.

    Returns:
        The highest TagReference, or None if no name is a release tag
    """
    tags = [TagReference.parse(name) for name in names if is_release_tag(name)]
    if not tags:
        return None
    return max(tags, key=lambda tag: tag.parsed)


def resolve_latest_tag(git: GitClient, url: str) -> TagReference:
    """
    Resolve the latest release tag on a remote repository.

    Raises:
        NoValidTagError: If listing fails or no release tag exists
    """
    try:
        listing = git.list_remote_tags(url)
    except GitError as e:
        raise NoValidTagError(f"Failed to list tags of {url}: {e}") from e

    names = parse_tag_refs(listing)
    logger.debug(f"{len(names)} tag refs listed on {url}")

    tag = select_latest_tag(names)
    if tag is None:
        raise NoValidTagError(f"Invalid version: no vX.Y.Z release tag found on {url}")
    return tag
