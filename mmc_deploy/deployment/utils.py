#!/usr/bin/env python3
"""
Deployment utilities - shared helper functions.
"""

import os
from datetime import datetime
from pathlib import Path

import yaml

from ..errors import PreconditionError

DEFAULT_CONFIG_PATH = "config/deployment-config.yaml"
DEFAULT_CREDENTIAL_ENV_VARS = {'username': 'MMC_USERNAME', 'password': 'MMC_PASSWORD'}
TIMESTAMP_VERSION_FORMAT = "%m-%d-%Y-%H:%M:%S"


def load_yaml(file_path):
    with open(file_path, 'r') as f:
        return yaml.safe_load(f)


def deep_merge(base, override):
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config(config_path=DEFAULT_CONFIG_PATH):
    """
    Load configuration with optional local overrides.
    - Default: deployment-config.yaml (production mode)
    - DEPLOYMENT_ENV=local: merges deployment-config.local.yaml overrides
    """
    base_path = Path(config_path)
    if not base_path.exists():
        raise PreconditionError(f"Configuration file not found: {base_path}")
    base_config = load_yaml(base_path) or {}

    env = os.environ.get('DEPLOYMENT_ENV', '').strip()
    if env == 'local':
        override_path = base_path.with_name(f"{base_path.stem}.local{base_path.suffix}")
        if override_path.exists():
            override_config = load_yaml(override_path) or {}
            return deep_merge(base_config, override_config)

    return base_config


def mask(value, keep=3):
    """Shorten a secret-ish value for console output."""
    if not value:
        return "null"
    if len(value) <= keep + 2:
        return "*" * len(value)
    return f"{value[:keep]}...{value[-2:]}"


def get_mmc_credentials(mmc_config=None):
    """Get MMC API credentials from the environment variables named in config."""
    env_vars = dict(DEFAULT_CREDENTIAL_ENV_VARS)
    env_vars.update((mmc_config or {}).get('api_env_vars') or {})
    username_env = env_vars['username']
    password_env = env_vars['password']

    username = os.environ.get(username_env)
    password = os.environ.get(password_env)

    if not username or not password:
        raise PreconditionError(
            f"MMC credentials not set: {username_env}, {password_env}\n"
            f"Set with: export {username_env}='user' {password_env}='pass'"
        )

    print(f"[OK] MMC credentials loaded (user={mask(username)})")
    return username, password


def timestamp_version(now=None):
    """Version string used when use_timestamp_version is on."""
    return (now or datetime.now()).strftime(TIMESTAMP_VERSION_FORMAT)


def artifact_path(output_directory, app_name):
    """Conventional location of the packaged application: <output_directory>/<app_name>.zip"""
    return Path(output_directory) / f"{app_name}.zip"


def check_artifact_file(file_path):
    """Fail before any remote call if the packaged application is missing."""
    artifact_file = Path(file_path)
    if not artifact_file.is_file():
        raise PreconditionError(
            f"No application ZIP file found at {artifact_file}: "
            f"check that the build produced the packaged application"
        )
    return artifact_file


def replace_existing(find_existing, delete_by_id, description="resource"):
    """
    Delete the resource returned by find_existing(), if any.

    Args:
        find_existing: Callable returning the existing id or None
        delete_by_id: Callable deleting a resource by id
        description: Label used in console output

    Returns:
        Id of the deleted resource, or None when nothing matched
    """
    existing_id = find_existing()
    if existing_id is None:
        return None
    print(f"Deleting existing {description} (id={existing_id})")
    delete_by_id(existing_id)
    print(f"✓ Deleted {description} {existing_id}")
    return existing_id


def print_phase(phase_num, phase_name):
    """Helper to print phase headers."""
    print(f"\n{'='*60}")
    if phase_num:
        print(f"STEP {phase_num}: {phase_name}")
    else:
        print(phase_name)
    print(f"{'='*60}")


def print_deployment_summary(settings):
    """Print what is about to be deployed, where, and as whom."""
    def quoted(value):
        return "null" if value is None else f'"{value}"'

    print("___MULE APPLICATION DEPLOYMENT SUMMARY___")
    print(f"> Artifact to be deployed : {quoted(settings.get('file'))}")
    print(f"> MMC URL : {quoted(settings.get('url'))}")
    print(f"> Username : {quoted(settings.get('username'))}")
    print(f"> Password : {'********' if settings.get('password') else 'null'}")
    print(f"> App name on the repository : {quoted(settings.get('repository_app_name'))}")
    print(f"> App version on the repository : {quoted(settings.get('version'))}")
    print(f"> Application to deploy : {quoted(settings.get('deployment_name'))}")
    print(f"> Target server or group : {quoted(settings.get('target'))}")
    print(f"> Deployment timeout (ms) : {settings.get('timeout_ms')}")
