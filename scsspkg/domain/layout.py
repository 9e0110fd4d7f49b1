"""
Filesystem layout of one scsspkg run.

Everything lives under a scratch directory in the working directory:

    tmp/
        swagger-ui/          shallow clone of the upstream release
        swagger-ui-scss/     staged package
            style/           verbatim copy of the upstream style dir
            core/            plugin stylesheets only, empty branches pruned
            LICENSE
            SECURITY.md
            README.md        local readme
            package.json     synthesized manifest
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class StagingLayout:
    """Resolved paths for the scratch, clone and staging directories."""

    scratch_dir: Path
    upstream_dir: Path
    staging_dir: Path
    readme: Path
    style_dir: str = "src/style"
    core_dir: str = "src/core"
    plugin_dir: str = "src/core/plugins"
    stylesheet_suffix: str = "css"
    license_file: str = "LICENSE"
    security_file: str = "SECURITY.md"
    manifest_file: str = "package.json"

    @classmethod
    def from_config(cls, config: Dict[str, Any], cwd: Optional[Path] = None) -> 'StagingLayout':
        """
        Build the layout from the 'paths' and 'upstream' config sections.

        Relative paths are resolved against cwd (default: current directory).
        """
        cwd = Path(cwd) if cwd else Path.cwd()
        paths = config.get('paths', {})
        upstream = config.get('upstream', {})

        scratch_dir = cwd / paths.get('scratch_dir', 'tmp')
        return cls(
            scratch_dir=scratch_dir,
            upstream_dir=scratch_dir / paths.get('clone_dir', 'swagger-ui'),
            staging_dir=scratch_dir / paths.get('staging_dir', 'swagger-ui-scss'),
            readme=cwd / paths.get('readme', 'README.md'),
            style_dir=upstream.get('style_dir', cls.style_dir),
            core_dir=upstream.get('core_dir', cls.core_dir),
            plugin_dir=upstream.get('plugin_dir', cls.plugin_dir),
            stylesheet_suffix=upstream.get('stylesheet_suffix', cls.stylesheet_suffix),
            license_file=upstream.get('license_file', cls.license_file),
            security_file=upstream.get('security_file', cls.security_file),
            manifest_file=upstream.get('manifest_file', cls.manifest_file),
        )

    @property
    def upstream_manifest(self) -> Path:
        return self.upstream_dir / self.manifest_file

    @property
    def staged_manifest(self) -> Path:
        return self.staging_dir / 'package.json'

    @property
    def staged_readme(self) -> Path:
        return self.staging_dir / self.readme.name
