"""
Unit tests for scsspkg.config module
"""
import unittest
import tempfile
import os
import shutil
import json
from pathlib import Path
from unittest.mock import patch

from scsspkg.config import (
    load_config,
    get_config_path,
    get_default_config,
    merge_configs,
    apply_env_overrides,
)


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up an isolated HOME and working directory"""
        self.temp_dir = tempfile.mkdtemp()
        self.original_home = os.environ.get('HOME')
        self.original_cwd = os.getcwd()
        os.environ['HOME'] = self.temp_dir
        os.chdir(self.temp_dir)
        self.env = patch.dict(os.environ, {}, clear=False)
        self.env.start()
        for key in list(os.environ):
            if key.startswith('SCSSPKG_'):
                del os.environ[key]

    def tearDown(self):
        """Clean up test environment"""
        self.env.stop()
        os.chdir(self.original_cwd)
        if self.original_home:
            os.environ['HOME'] = self.original_home
        else:
            del os.environ['HOME']
        shutil.rmtree(self.temp_dir)

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        for section in ('upstream', 'package', 'registry', 'paths', 'install', 'logging'):
            self.assertIn(section, config)

        self.assertEqual(config['package']['name'], '@createiq/swagger-ui-scss')
        self.assertEqual(config['package']['dependency'], 'tachyons-sass')
        self.assertEqual(config['upstream']['repository_url'],
                         'https://github.com/swagger-api/swagger-ui.git')
        self.assertEqual(config['install']['command'], ['npm', 'install'])

    def test_load_config_no_file(self):
        """Defaults are used when no file exists"""
        self.assertEqual(load_config(), get_default_config())

    def test_load_local_json_file(self):
        """scsspkg.json in the working directory is picked up"""
        Path(self.temp_dir, 'scsspkg.json').write_text(json.dumps({
            'registry': {'url': 'https://npm.example.com'}
        }))

        config = load_config()

        self.assertEqual(config['registry']['url'], 'https://npm.example.com')
        # Merged, not replaced
        self.assertEqual(config['registry']['timeout_seconds'], 30)

    def test_load_home_toml_file(self):
        """~/.scsspkg/config.toml is read with tomllib"""
        config_dir = Path(self.temp_dir) / '.scsspkg'
        config_dir.mkdir()
        (config_dir / 'config.toml').write_text(
            '[paths]\nscratch_dir = "build"\n\n[install]\ncommand = ["pnpm", "install"]\n'
        )

        config = load_config()

        self.assertEqual(config['paths']['scratch_dir'], 'build')
        self.assertEqual(config['install']['command'], ['pnpm', 'install'])

    def test_load_yaml_from_env_path(self):
        """SCSSPKG_CONFIG points at a YAML file"""
        path = Path(self.temp_dir) / 'custom.yaml'
        path.write_text('package:\n  contributor: "Jane Doe <jane@example.com>"\n')
        os.environ['SCSSPKG_CONFIG'] = str(path)

        self.assertEqual(get_config_path(), path)
        self.assertEqual(load_config()['package']['contributor'], 'Jane Doe <jane@example.com>')

    def test_local_config_in_given_directory(self):
        """A scsspkg.* file is looked up in the directory passed in"""
        workdir = Path(self.temp_dir) / 'checkout'
        workdir.mkdir()
        path = workdir / 'scsspkg.json'
        path.write_text(json.dumps({'paths': {'scratch_dir': 'build'}}))

        self.assertEqual(get_config_path(workdir), path)
        self.assertEqual(load_config(workdir)['paths']['scratch_dir'], 'build')
        self.assertEqual(load_config()['paths']['scratch_dir'], 'tmp')

    def test_invalid_file_falls_back_to_defaults(self):
        """A broken config file is logged and ignored"""
        Path(self.temp_dir, 'scsspkg.json').write_text('{broken')
        with self.assertLogs('scsspkg', level='ERROR'):
            config = load_config()
        self.assertEqual(config, get_default_config())

    def test_env_overrides(self):
        """SCSSPKG_SECTION_KEY variables override values"""
        os.environ['SCSSPKG_REGISTRY_TIMEOUT_SECONDS'] = '60'
        os.environ['SCSSPKG_PATHS_SCRATCH_DIR'] = 'scratch'
        os.environ['SCSSPKG_INSTALL_COMMAND'] = 'yarn install --frozen-lockfile'

        config = apply_env_overrides(get_default_config())

        self.assertEqual(config['registry']['timeout_seconds'], 60)
        self.assertEqual(config['paths']['scratch_dir'], 'scratch')
        self.assertEqual(config['install']['command'], ['yarn', 'install', '--frozen-lockfile'])

    def test_unknown_env_key_ignored(self):
        os.environ['SCSSPKG_NOPE_VALUE'] = 'x'
        self.assertEqual(apply_env_overrides(get_default_config()), get_default_config())

    def test_merge_configs(self):
        base = {'a': {'b': 1, 'c': 2}, 'd': 3}
        merged = merge_configs(base, {'a': {'b': 10}, 'e': 5})
        self.assertEqual(merged, {'a': {'b': 10, 'c': 2}, 'd': 3, 'e': 5})
        self.assertEqual(base['a']['b'], 1)


if __name__ == '__main__':
    unittest.main()
