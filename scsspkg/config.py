#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("scsspkg")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
LOCAL_CONFIG_FILENAMES = ['scsspkg.json', 'scsspkg.toml', 'scsspkg.yaml', 'scsspkg.yml']


def get_config_path(cwd=None):
    """Get the path to the configuration file.

    Checks in order:
    1. SCSSPKG_CONFIG environment variable
    2. scsspkg.* in cwd (default: the current working directory)
    3. ~/.scsspkg/ directory
    """
    if 'SCSSPKG_CONFIG' in os.environ:
        path = Path(os.environ['SCSSPKG_CONFIG'])
        if path.exists():
            return path

    local_dir = Path(cwd) if cwd else Path.cwd()
    for filename in LOCAL_CONFIG_FILENAMES:
        path = local_dir / filename
        if path.exists():
            return path

    config_dir = Path.home() / '.scsspkg'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists() and path.stat().st_size > 10:  # Not empty/trivial
            return path

    # If no file exists, return default path
    return config_dir / 'config.json'


def load_config(cwd=None):
    """Load configuration from file, looking for a local scsspkg.* in cwd."""
    config_path = get_config_path(cwd)

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                import yaml
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            config = merge_configs(config, file_config)
        except Exception as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    config = apply_env_overrides(config)

    return config


def get_default_config():
    """Get default configuration."""
    return {
        "upstream": {
            "repository_url": "https://github.com/swagger-api/swagger-ui.git",
            "style_dir": "src/style",
            "core_dir": "src/core",
            "plugin_dir": "src/core/plugins",
            "stylesheet_suffix": "css",
            "license_file": "LICENSE",
            "security_file": "SECURITY.md",
            "manifest_file": "package.json",
        },
        "package": {
            "name": "@createiq/swagger-ui-scss",
            "repository_url": "https://github.com/linklaterscreateiq/swagger-ui-scss",
            "main": "./style/main.scss",
            "contributor": "Mathew Mannion <mathew.mannion@linklaters.com>",
            "dependency": "tachyons-sass",
        },
        "registry": {
            "url": "https://registry.npmjs.org",
            "timeout_seconds": 30,
        },
        "paths": {
            "scratch_dir": "tmp",
            "clone_dir": "swagger-ui",
            "staging_dir": "swagger-ui-scss",
            "readme": "README.md",
        },
        "install": {
            "command": ["npm", "install"],
        },
        "logging": {
            "level": "INFO",
        },
    }


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: SCSSPKG_SECTION_KEY
    For example: SCSSPKG_REGISTRY_TIMEOUT_SECONDS=60
    """
    env_prefix = "SCSSPKG_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == 'SCSSPKG_CONFIG':
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None
            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            if i + best_match_len == len(key_parts):
                if isinstance(current_level[matched_key], list) and isinstance(typed_value, str):
                    typed_value = typed_value.split()
                current_level[matched_key] = typed_value
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                # Path conflict, e.g., env var is longer but we found a non-dict value
                break

    return config


def set_log_level(level):
    """Set the level of the package logger, e.g. 'DEBUG' for --verbose."""
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
