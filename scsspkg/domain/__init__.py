"""
Domain layer for scsspkg.

Contains pure domain objects with no I/O or side effects:
- TagReference: An upstream release tag (v5.2.0 / 5.2.0)
- RunDecision: Whether a publish is warranted
- RunResult: What one run found and did
- StagingLayout: Paths of the scratch, clone and staging directories
"""

from .release import (
    TagReference,
    RunDecision,
    RunResult,
    is_release_tag,
    is_valid_semver,
)
from .layout import StagingLayout

__all__ = [
    'TagReference',
    'RunDecision',
    'RunResult',
    'is_release_tag',
    'is_valid_semver',
    'StagingLayout',
]
