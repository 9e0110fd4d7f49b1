"""
Builds the package.json of the staged package from the upstream one.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ..exit_codes import ManifestError
from ..infra.file_store import read_json, write_json_atomic

logger = logging.getLogger(__name__)


def read_upstream_manifest(path: Path) -> Dict[str, Any]:
    """
    Read and parse the upstream package.json.

    Raises:
        ManifestError: If the file is missing, unreadable or not a JSON object
    """
    try:
        data = read_json(path)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data


def build_manifest(upstream: Dict[str, Any], package: Dict[str, Any]) -> Dict[str, Any]:
    """
    Derive the staged package manifest.

    Fields copied from upstream: version, homepage, license. The contributor
    list is upstream's with package['contributor'] appended. The only
    dependency is package['dependency'], pinned to the range upstream
    declares for it under devDependencies.

    Args:
        upstream: Parsed upstream package.json
        package: The 'package' config section

    Raises:
        ManifestError: If upstream does not declare the dependency
    """
    dependency = package['dependency']
    dev_dependencies = upstream.get('devDependencies') or {}
    if dependency not in dev_dependencies:
        raise ManifestError(f"Upstream devDependencies has no entry for {dependency}")

    return {
        'name': package['name'],
        'version': upstream.get('version'),
        'main': package['main'],
        'homepage': upstream.get('homepage'),
        'repository': {'type': 'git', 'url': f"git+{package['repository_url']}"},
        'contributors': list(upstream.get('contributors') or []) + [package['contributor']],
        'license': upstream.get('license'),
        'dependencies': {
            dependency: dev_dependencies[dependency],
        },
    }


def write_manifest(path: Path, manifest: Dict[str, Any]) -> None:
    """
    Write a manifest with 2-space indentation and a trailing newline.

    Raises:
        ManifestError: If the file cannot be written
    """
    try:
        write_json_atomic(path, manifest)
    except OSError as e:
        raise ManifestError(f"Failed to write {path}: {e}") from e
