"""
Service layer for scsspkg.

One module per pipeline stage:
- version_service: Resolve the latest upstream release tag
- publish_gate: Compare with the published version and decide
- fetch_service: Reset the scratch dir and clone the release
- stage_service: Copy the style assets and prune-copy plugin stylesheets
- manifest_service: Derive and write the staged package.json
- install_service: Run the package manager install with live output
"""

from .version_service import parse_tag_refs, select_latest_tag, resolve_latest_tag
from .publish_gate import fetch_published_version, decide, check_versions
from .fetch_service import reset_scratch_dir, fetch_release
from .stage_service import (
    is_plugin_stylesheet,
    contains_plugin_stylesheet,
    prune_copy,
    stage_package,
)
from .manifest_service import read_upstream_manifest, build_manifest, write_manifest
from .install_service import install_dependencies

__all__ = [
    'parse_tag_refs',
    'select_latest_tag',
    'resolve_latest_tag',
    'fetch_published_version',
    'decide',
    'check_versions',
    'reset_scratch_dir',
    'fetch_release',
    'is_plugin_stylesheet',
    'contains_plugin_stylesheet',
    'prune_copy',
    'stage_package',
    'read_upstream_manifest',
    'build_manifest',
    'write_manifest',
    'install_dependencies',
]
