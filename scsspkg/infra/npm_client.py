"""
npm registry client infrastructure for scsspkg.

Reads package documents from an npm-compatible registry over HTTP.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """The registry could not be reached or returned an unusable document."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def escape_package_name(name: str) -> str:
    """
    Escape a package name for use in a registry URL path.

    Scoped names keep their leading '@' and have the '/' encoded:
    '@createiq/swagger-ui-scss' -> '@createiq%2fswagger-ui-scss'.
    """
    if name.startswith('@'):
        return '@' + quote(name[1:], safe='').replace('%2F', '%2f')
    return quote(name, safe='')


class NpmRegistryClient:
    """
    Minimal npm registry client.

    Example:
        client = NpmRegistryClient()
        doc = client.package_document("@createiq/swagger-ui-scss")
        print(doc["dist-tags"]["latest"])
    """

    def __init__(
        self,
        registry_url: str = "https://registry.npmjs.org",
        timeout: Optional[int] = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize NpmRegistryClient.

        Args:
            registry_url: Registry base URL
            timeout: Request timeout in seconds
            session: Optional requests session (for testing / connection reuse)
        """
        self.registry_url = registry_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def package_url(self, name: str) -> str:
        return f"{self.registry_url}/{escape_package_name(name)}"

    def package_document(self, name: str) -> Dict[str, Any]:
        """
        Fetch the packument for a package.

        Raises:
            RegistryError: On network failure, non-200 status or invalid JSON
        """
        url = self.package_url(name)
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(
                url,
                headers={'Accept': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RegistryError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise RegistryError(f"Package {name} not found in registry", status_code=404)
        if response.status_code != 200:
            raise RegistryError(
                f"Registry returned status {response.status_code} for {name}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RegistryError(f"Invalid JSON from registry for {name}: {e}") from e

        if not isinstance(data, dict):
            raise RegistryError(f"Unexpected registry document for {name}")
        return data

    def dist_tags(self, name: str) -> Dict[str, str]:
        """Get the dist-tags mapping (e.g. {'latest': '1.2.3'}) for a package."""
        tags = self.package_document(name).get('dist-tags')
        if not isinstance(tags, dict):
            return {}
        return tags
