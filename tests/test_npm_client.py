"""
Tests for the npm registry client.
"""

import pytest
import requests
from unittest.mock import MagicMock

from scsspkg.infra.npm_client import (
    NpmRegistryClient,
    RegistryError,
    escape_package_name,
)


def session_returning(status_code=200, json_data=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    session = MagicMock(spec=requests.Session)
    session.get.return_value = response
    return session


class TestEscapePackageName:

    def test_scoped(self):
        assert escape_package_name("@createiq/swagger-ui-scss") == "@createiq%2fswagger-ui-scss"

    def test_unscoped(self):
        assert escape_package_name("swagger-ui") == "swagger-ui"


class TestNpmRegistryClient:

    def test_package_url(self):
        client = NpmRegistryClient("https://registry.example.com/", session=MagicMock())
        assert client.package_url("@a/b") == "https://registry.example.com/@a%2fb"

    def test_dist_tags(self):
        session = session_returning(json_data={'name': 'x', 'dist-tags': {'latest': '1.2.3'}})
        client = NpmRegistryClient(session=session, timeout=5)

        assert client.dist_tags("x") == {'latest': '1.2.3'}
        session.get.assert_called_once_with(
            "https://registry.npmjs.org/x",
            headers={'Accept': 'application/json'},
            timeout=5,
        )

    def test_missing_dist_tags(self):
        client = NpmRegistryClient(session=session_returning(json_data={'name': 'x'}))
        assert client.dist_tags("x") == {}

    def test_not_found(self):
        client = NpmRegistryClient(session=session_returning(status_code=404))
        with pytest.raises(RegistryError) as exc_info:
            client.dist_tags("x")
        assert exc_info.value.status_code == 404

    def test_server_error(self):
        client = NpmRegistryClient(session=session_returning(status_code=503))
        with pytest.raises(RegistryError, match="503"):
            client.package_document("x")

    def test_network_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.side_effect = requests.ConnectionError("connection refused")
        client = NpmRegistryClient(session=session)
        with pytest.raises(RegistryError, match="connection refused"):
            client.package_document("x")

    def test_invalid_json(self):
        client = NpmRegistryClient(session=session_returning(json_error=ValueError("Expecting value")))
        with pytest.raises(RegistryError, match="Invalid JSON"):
            client.package_document("x")

    def test_non_object_document(self):
        client = NpmRegistryClient(session=session_returning(json_data=["x"]))
        with pytest.raises(RegistryError):
            client.package_document("x")
