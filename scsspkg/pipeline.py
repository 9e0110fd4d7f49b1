"""
The publish pipeline.

Runs each stage to completion, in order, inside its own status task:

    resolve tag -> check registry -> gate -> clone -> stage -> manifest -> install

Every failure ends the run; there are no retries.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .config import load_config
from .domain.layout import StagingLayout
from .domain.release import RunDecision, RunResult, TagReference
from .exit_codes import ConfigError
from .infra.git_client import GitClient
from .infra.npm_client import NpmRegistryClient
from .progress import ProgressReporter, get_progress
from .services.version_service import resolve_latest_tag
from .services.publish_gate import fetch_published_version, check_versions
from .services.fetch_service import reset_scratch_dir, fetch_release
from .services.stage_service import stage_package
from .services.manifest_service import read_upstream_manifest, build_manifest, write_manifest
from .services.install_service import install_dependencies

logger = logging.getLogger(__name__)


class Publisher:
    """
    Orchestrates one repackaging run.

    Example:
        publisher = Publisher()
        result = publisher.run()
        if result.decision is RunDecision.NO_OP:
            print("Nothing to publish")
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        git: Optional[GitClient] = None,
        registry: Optional[NpmRegistryClient] = None,
        reporter: Optional[ProgressReporter] = None,
        cwd: Optional[Path] = None,
        stdout=None,
        stderr=None,
    ):
        """
        Initialize Publisher.

        Args:
            config: Configuration dict (loads default if None)
            git: Git client (default: GitClient())
            registry: Registry client (default: from the 'registry' section)
            reporter: Status reporter (default: global progress reporter)
            cwd: Directory the scratch dir and readme are resolved against
            stdout, stderr: Streams the install output is forwarded to
        """
        self.config = config or load_config()
        self.git = git or GitClient()
        registry_config = self.config.get('registry', {})
        self.registry = registry or NpmRegistryClient(
            registry_config.get('url', 'https://registry.npmjs.org'),
            timeout=registry_config.get('timeout_seconds'),
        )
        self.reporter = reporter or get_progress()
        self.layout = StagingLayout.from_config(self.config, cwd=cwd)
        self.stdout = stdout
        self.stderr = stderr

    @property
    def upstream_url(self) -> str:
        return self.config['upstream']['repository_url']

    @property
    def package(self) -> Dict[str, Any]:
        return self.config['package']

    def check(self) -> RunResult:
        """Resolve the upstream tag and apply the publish gate, without side effects."""
        tag, published, decision = self._gate()
        return RunResult(tag=tag, published_version=published, decision=decision)

    def run(self) -> RunResult:
        """
        Run the full pipeline.

        Returns:
            RunResult; staged_path is set only when a package was staged

        Raises:
            CommandError: On any fatal stage failure
        """
        command = self.config.get('install', {}).get('command')
        if not command or not isinstance(command, list):
            raise ConfigError("install.command must be a non-empty list")

        tag, published, decision = self._gate()
        if decision is RunDecision.NO_OP:
            return RunResult(tag=tag, published_version=published, decision=decision)

        with self.reporter.task("Cloning the upstream repository") as status:
            reset_scratch_dir(self.layout.scratch_dir, status)
            fetch_release(self.git, self.upstream_url, tag.name, self.layout.upstream_dir, status)

        with self.reporter.task("Creating the package to publish") as status:
            staged = stage_package(self.layout, status)

            status.update("Creating package.json")
            upstream_manifest = read_upstream_manifest(self.layout.upstream_manifest)
            manifest = build_manifest(upstream_manifest, self.package)
            write_manifest(self.layout.staged_manifest, manifest)

            status.update("Installing dependencies")
            install_dependencies(staged, command, stdout=self.stdout, stderr=self.stderr)

            status.succeed(f"Staged {manifest['name']}@{manifest['version']} in {staged}")

        return RunResult(
            tag=tag,
            published_version=published,
            decision=decision,
            staged_path=staged,
        )

    def _gate(self) -> Tuple[TagReference, Optional[str], RunDecision]:
        with self.reporter.task("Get latest tag from upstream") as status:
            tag = resolve_latest_tag(self.git, self.upstream_url)
            status.update(f"git effective latest tag name = {tag.name}, tagged version = {tag.version}")

        with self.reporter.task("Get package version from npm registry") as status:
            published = fetch_published_version(self.registry, self.package['name'], status)

        with self.reporter.task("Checking versions") as status:
            decision = check_versions(tag.version, published, status)

        logger.debug(f"Upstream {tag.version}, published {published}: {decision.value}")
        return tag, published, decision
