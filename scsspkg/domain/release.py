"""
Release domain objects for scsspkg.

A release is identified by an upstream git tag of the exact form vX.Y.Z.
Pre-release and build-metadata tags (v1.2.3-alpha, v1.2.3+deno) are never
considered releases.
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any

from packaging.version import Version

SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)
RELEASE_TAG_RE = re.compile(r"^v[0-9]+\.[0-9]+\.[0-9]+$")


def is_valid_semver(value: str) -> bool:
    """Check a string against the semantic versioning grammar."""
    return bool(SEMVER_RE.match(value))


def is_release_tag(name: str) -> bool:
    """
    Check whether a tag name is a plain release tag.

    The name must start with 'v', the remainder must be a valid semantic
    version, and the whole name must be exactly v<digits>.<digits>.<digits>.

    Examples:
        is_release_tag("v5.2.0")        -> True
        is_release_tag("v5.2.0-rc.1")   -> False
        is_release_tag("v5.2")          -> False
        is_release_tag("5.2.0")         -> False
    """
    if not name.startswith('v'):
        return False
    if not is_valid_semver(name[1:]):
        return False
    return bool(RELEASE_TAG_RE.match(name))


@dataclass(frozen=True)
class TagReference:
    """
    An upstream release tag in raw (v5.2.0) and stripped (5.2.0) form.

    Only constructed from names accepted by is_release_tag.
    """

    name: str
    version: str

    @classmethod
    def parse(cls, name: str) -> 'TagReference':
        """
        Build a TagReference from a raw tag name.

        Raises:
            ValueError: If the name is not a plain release tag
        """
        if not is_release_tag(name):
            raise ValueError(f"Not a release tag: {name!r}")
        return cls(name=name, version=name[1:])

    @property
    def parsed(self) -> Version:
        return Version(self.version)

    def __str__(self) -> str:
        return self.name


class RunDecision(Enum):
    """Outcome of comparing the upstream tag with the published version."""
    PROCEED = "proceed"    # Upstream is newer, or nothing is published yet
    NO_OP = "no-op"        # Already published, nothing to do
    BEHIND = "behind"      # Published is newer than upstream, an error


@dataclass
class RunResult:
    """What a publisher run found and did."""

    tag: TagReference
    published_version: Optional[str]
    decision: RunDecision
    staged_path: Optional[Path] = None

    @property
    def staged(self) -> bool:
        """True when a package was staged and is ready to publish."""
        return self.staged_path is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tag': self.tag.name,
            'version': self.tag.version,
            'published_version': self.published_version,
            'decision': self.decision.value,
            'staged_path': str(self.staged_path) if self.staged_path else None,
        }
