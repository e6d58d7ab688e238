#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import yaml

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("testdrive")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. TESTDRIVE_CONFIG environment variable
    2. ~/.testdrive/ directory
    """
    # Check for environment variable override
    if 'TESTDRIVE_CONFIG' in os.environ:
        path = Path(os.environ['TESTDRIVE_CONFIG'])
        if path.exists():
            return path

    testdrive_dir = Path.home() / '.testdrive'
    for filename in CONFIG_FILENAMES:
        path = testdrive_dir / filename
        if path.exists() and path.stat().st_size > 0:
            return path

    # If no file exists, return default path
    return testdrive_dir / 'config.json'


def load_config(config_path=None):
    """Load configuration from file.

    Args:
        config_path: Explicit config file (default: see get_config_path)

    Returns:
        dict: Defaults merged with the file contents and environment overrides
    """
    config_path = Path(config_path) if config_path else get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        suffix = config_path.suffix.lower()
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                file_config = tomllib.load(f)
        elif suffix in ['.yaml', '.yml']:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f)
        else:
            # Default to JSON format
            with open(config_path, 'r') as f:
                file_config = json.load(f)

        if file_config:
            # Merge file config with defaults
            config = merge_configs(config, file_config)
        logger.debug(f"Loaded configuration from {config_path}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def get_default_config():
    """Get default configuration."""
    return {
        "checkout": {
            "default_branch": "master"
        },
        "search": {
            "command": "pod search {name} --simple"
        },
        "workspace": {
            "output_directory": ".",
            "open_command": "open",
            "open_after_generate": True,
            "default_platform": "ios"
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        }
    }


def configure_logging(config, verbose=False):
    """
    Apply the logging section of the configuration to the root logger.

    Args:
        config (dict): Loaded configuration
        verbose (bool): Force DEBUG level
    """
    logging_config = config.get("logging", {})
    level_name = "DEBUG" if verbose else str(logging_config.get("level", "WARNING")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    fmt = logging_config.get("format")
    if fmt:
        for handler in root.handlers:
            handler.setFormatter(logging.Formatter(fmt))


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
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: TESTDRIVE_SECTION_KEY
    For example: TESTDRIVE_CHECKOUT_DEFAULT_BRANCH=main
    """
    env_prefix = "TESTDRIVE_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
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

            if matched_key:
                # If we are at the end of the env var, we have found the key to set
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = typed_value
                    break

                # Otherwise, we descend into the dictionary
                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                # No match found
                break

    return config
