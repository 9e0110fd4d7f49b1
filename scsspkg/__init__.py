"""
scsspkg - Repackage the swagger-ui stylesheets as a standalone npm package.

Each run resolves the latest vX.Y.Z release tag of swagger-ui, compares it
with the version of @createiq/swagger-ui-scss on npm and, when upstream is
ahead, stages a new package under ./tmp/swagger-ui-scss ready to publish.

Quick Start:
    from scsspkg import Publisher, RunDecision

    result = Publisher().run()
    if result.decision is RunDecision.NO_OP:
        print("Already up to date")
    else:
        print(f"Staged {result.tag.version} in {result.staged_path}")

Domain Objects:
    TagReference - An upstream release tag
    RunDecision - proceed / no-op / behind
    RunResult - What a run found and did
    StagingLayout - Scratch, clone and staging paths
"""

__version__ = "0.1.0"

from .pipeline import Publisher

from .domain import (
    TagReference,
    RunDecision,
    RunResult,
    StagingLayout,
)

from .config import load_config

__all__ = [
    "__version__",
    "Publisher",
    "TagReference",
    "RunDecision",
    "RunResult",
    "StagingLayout",
    "load_config",
]
