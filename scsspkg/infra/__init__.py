"""
Infrastructure layer for scsspkg.

Contains abstractions for external systems:
- GitClient: Git command execution (ls-remote, clone)
- NpmRegistryClient: npm registry access
- file_store: JSON reads and atomic JSON writes for manifests

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, GitError
from .npm_client import NpmRegistryClient, RegistryError, escape_package_name
from .file_store import write_json_atomic, read_json

__all__ = [
    'GitClient',
    'GitError',
    'NpmRegistryClient',
    'RegistryError',
    'escape_package_name',
    'write_json_atomic',
    'read_json',
]
