"""
Tests for release domain objects.
"""

import pytest
from pathlib import Path

from scsspkg.domain.release import (
    TagReference,
    RunDecision,
    RunResult,
    is_release_tag,
    is_valid_semver,
)


class TestIsReleaseTag:
    """The strict vX.Y.Z tag filter."""

    @pytest.mark.parametrize("name", ["v5.2.0", "v0.0.1", "v10.20.30", "v1.0.0"])
    def test_accepts_plain_release_tags(self, name):
        assert is_release_tag(name) is True

    @pytest.mark.parametrize("name", [
        "v5.2.0-rc.1",      # pre-release
        "v1.2.3+deno",      # build metadata
        "v1.2.3-alpha",
        "v5.2",             # two components
        "v5",
        "5.2.0",            # no leading v
        "V5.2.0",
        "v01.2.3",          # leading zero is not valid semver
        "v1.2.3.4",
        "vx.y.z",
        "",
        "v",
    ])
    def test_rejects_everything_else(self, name):
        assert is_release_tag(name) is False

    def test_semver_grammar(self):
        assert is_valid_semver("1.2.3")
        assert is_valid_semver("1.2.3-rc.1+build.5")
        assert not is_valid_semver("1.2")
        assert not is_valid_semver("1.02.3")


class TestTagReference:

    def test_parse_strips_v(self):
        tag = TagReference.parse("v5.17.14")
        assert tag.name == "v5.17.14"
        assert tag.version == "5.17.14"
        assert str(tag) == "v5.17.14"

    def test_parse_rejects_non_release(self):
        with pytest.raises(ValueError):
            TagReference.parse("v5.17.14-rc.1")

    def test_ordering_is_numeric(self):
        assert TagReference.parse("v1.10.0").parsed > TagReference.parse("v1.9.0").parsed


class TestRunResult:

    def test_to_dict_without_staging(self):
        result = RunResult(
            tag=TagReference.parse("v2.0.0"),
            published_version="2.0.0",
            decision=RunDecision.NO_OP,
        )
        assert result.staged is False
        assert result.to_dict() == {
            'tag': 'v2.0.0',
            'version': '2.0.0',
            'published_version': '2.0.0',
            'decision': 'no-op',
            'staged_path': None,
        }

    def test_to_dict_with_staging(self):
        result = RunResult(
            tag=TagReference.parse("v2.0.0"),
            published_version=None,
            decision=RunDecision.PROCEED,
            staged_path=Path("tmp/swagger-ui-scss"),
        )
        assert result.staged is True
        assert result.to_dict()['staged_path'] == str(Path("tmp/swagger-ui-scss"))
        assert result.to_dict()['decision'] == 'proceed'
