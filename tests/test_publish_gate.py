"""
Tests for the publish gate.
"""

import pytest
from unittest.mock import MagicMock

from scsspkg.domain.release import RunDecision
from scsspkg.exit_codes import VersionRegressionError
from scsspkg.infra.npm_client import NpmRegistryClient, RegistryError
from scsspkg.progress import ProgressReporter, LogLevel
from scsspkg.services.publish_gate import (
    fetch_published_version,
    decide,
    check_versions,
)


@pytest.fixture
def status():
    reporter = ProgressReporter(enabled=False, use_colors=False)
    with reporter.task("Get package version from npm registry") as task:
        yield task


def registry_with(dist_tags=None, error=None):
    registry = MagicMock(spec=NpmRegistryClient)
    if error:
        registry.dist_tags.side_effect = error
    else:
        registry.dist_tags.return_value = dist_tags
    return registry


class TestDecide:
    """Gate decision table."""

    @pytest.mark.parametrize("upstream,published,expected", [
        ("2.0.0", "2.0.0", RunDecision.NO_OP),
        ("2.0.0", "1.9.0", RunDecision.PROCEED),
        ("1.9.0", "2.0.0", RunDecision.BEHIND),
        ("2.0.0", None, RunDecision.PROCEED),
        ("1.10.0", "1.9.0", RunDecision.PROCEED),
        ("1.9.0", "1.10.0", RunDecision.BEHIND),
        ("2.0.0", "2.0.0+build.1", RunDecision.PROCEED),
        ("2.0.0", "2.0.1+build.1", RunDecision.BEHIND),
    ])
    def test_decision_table(self, upstream, published, expected):
        assert decide(upstream, published) is expected


class TestCheckVersions:

    def test_no_op_is_reported_as_info(self, status):
        assert check_versions("2.0.0", "2.0.0", status) is RunDecision.NO_OP
        assert status.outcome is LogLevel.INFO

    def test_behind_raises(self, status):
        with pytest.raises(VersionRegressionError) as exc_info:
            check_versions("1.9.0", "2.0.0", status)
        assert exc_info.value.exit_code == 1
        assert exc_info.value.published == "2.0.0"

    def test_proceed(self, status):
        assert check_versions("2.0.0", None, status) is RunDecision.PROCEED
        assert status.active is True
        assert "Ready to publish version 2.0.0" in status.suffix


class TestFetchPublishedVersion:

    def test_latest_version(self, status):
        registry = registry_with({'latest': '5.17.14'})
        assert fetch_published_version(registry, "@createiq/swagger-ui-scss", status) == "5.17.14"
        registry.dist_tags.assert_called_once_with("@createiq/swagger-ui-scss")

    def test_prerelease_suffix_truncated(self, status):
        registry = registry_with({'latest': '5.17.14-1'})
        assert fetch_published_version(registry, "pkg", status) == "5.17.14"

    def test_build_metadata_truncated(self, status):
        registry = registry_with({'latest': '5.17.14+build.3'})
        assert fetch_published_version(registry, "pkg", status) == "5.17.14"

    def test_missing_latest_warns(self, status):
        registry = registry_with({'next': '6.0.0'})
        assert fetch_published_version(registry, "pkg", status) is None
        assert status.outcome is LogLevel.WARNING

    def test_registry_error_warns(self, status):
        registry = registry_with(error=RegistryError("Package pkg not found in registry", 404))
        assert fetch_published_version(registry, "pkg", status) is None
        assert status.outcome is LogLevel.WARNING
        assert "not found" in status.messages[-1][1]

    def test_unparseable_version_warns(self, status):
        registry = registry_with({'latest': 'banana'})
        assert fetch_published_version(registry, "pkg", status) is None
        assert status.outcome is LogLevel.WARNING

    def test_works_without_status(self):
        assert fetch_published_version(registry_with({}), "pkg") is None
