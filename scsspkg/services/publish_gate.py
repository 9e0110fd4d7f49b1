"""
Publish gate for scsspkg.

Compares the resolved upstream version with the version currently
published on the npm registry and decides whether to go on.
"""

import logging
import re
from typing import Optional

from packaging.version import Version, InvalidVersion

from ..domain.release import RunDecision
from ..exit_codes import VersionRegressionError
from ..infra.npm_client import NpmRegistryClient, RegistryError
from ..progress import Task

logger = logging.getLogger(__name__)

NOT_PUBLISHED_HINT = "The package may not have been published yet"


def fetch_published_version(
    registry: NpmRegistryClient,
    package_name: str,
    status: Optional[Task] = None,
) -> Optional[str]:
    """
    Get the published 'latest' version of a package, without pre-release
    or build suffix.

    Any failure (network, 404, malformed document, unparseable version)
    is reported as a warning and yields None.
    """
    try:
        latest = registry.dist_tags(package_name).get('latest')
    except RegistryError as e:
        logger.debug(f"Registry lookup for {package_name} failed: {e}")
        if status:
            status.warn(f"Failed to get a version: {e}. {NOT_PUBLISHED_HINT}")
        return None

    version = re.split(r'[-+]', latest)[0] if isinstance(latest, str) else None
    if version:
        try:
            Version(version)
        except InvalidVersion:
            version = None

    if not version:
        if status:
            status.warn(f"Failed to get a version. {NOT_PUBLISHED_HINT}")
        return None

    if status:
        status.update(f"Success, npm version = {version}")
    return version


def _precedence(version: str) -> Version:
    # Build metadata does not take part in semver ordering.
    return Version(version.split('+')[0])


def decide(upstream: str, published: Optional[str]) -> RunDecision:
    """
    Decide whether a publish is warranted.

    Examples:
        decide("2.0.0", "2.0.0") -> RunDecision.NO_OP
        decide("2.0.0", "1.9.0") -> RunDecision.PROCEED
        decide("1.9.0", "2.0.0") -> RunDecision.BEHIND
        decide("2.0.0", None)    -> RunDecision.PROCEED
    """
    if upstream == published:
        return RunDecision.NO_OP
    if published is not None and _precedence(published) > _precedence(upstream):
        return RunDecision.BEHIND
    return RunDecision.PROCEED


def check_versions(
    upstream: str,
    published: Optional[str],
    status: Optional[Task] = None,
) -> RunDecision:
    """
    Apply the gate decision.

    Returns:
        RunDecision.PROCEED or RunDecision.NO_OP

    Raises:
        VersionRegressionError: If the published version is ahead of upstream
    """
    decision = decide(upstream, published)

    if decision is RunDecision.NO_OP:
        if status:
            status.info("Versions are the same, no publishing required")
    elif decision is RunDecision.BEHIND:
        raise VersionRegressionError(upstream, published)
    elif status:
        status.update(f"Ready to publish version {upstream} as gt {published}")

    return decision
