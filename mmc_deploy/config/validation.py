#!/usr/bin/env python3
"""
Deployment Config Validation
Validates deployment-config.yaml for schema compliance and required fields
"""

import argparse
import json
import sys
from pathlib import Path

import jsonschema
import yaml

SCHEMA_FILE = Path(__file__).parent.parent / 'schemas' / 'deployment-config-schema.json'


def load_yaml(file_path):
    """Load YAML file safely."""
    try:
        with open(file_path, 'r') as f:
            return yaml.safe_load(f), None
    except yaml.YAMLError as e:
        return None, str(e)
    except OSError as e:
        return None, str(e)


def load_schema():
    with open(SCHEMA_FILE, 'r') as f:
        return json.load(f)


def validate_against_schema(config):
    """
    Validate a loaded config dict against the JSON schema.
    Returns (is_valid, errors_list)
    """
    try:
        schema = load_schema()
    except (OSError, ValueError) as e:
        return False, [f"Error loading schema file: {e}"]

    try:
        jsonschema.validate(instance=config, schema=schema)
        return True, []
    except jsonschema.ValidationError as e:
        error_path = ' -> '.join(str(p) for p in e.path) if e.path else 'root'
        error_msg = f"Schema validation failed at '{error_path}': {e.message}"
        return False, [error_msg]
    except jsonschema.SchemaError as e:
        return False, [f"Schema file is invalid: {e.message}"]


def check_settings(settings):
    """Check resolved deployment settings. Returns list of errors."""
    errors = []

    for key in ('url', 'target', 'repository_app_name', 'deployment_name', 'version'):
        if not settings.get(key):
            errors.append(f"Missing required setting: {key}")

    file_path = settings.get('file')
    if not file_path:
        errors.append("Missing required setting: file")
    elif not Path(file_path).exists():
        errors.append(f"Artifact file not found: {file_path}")

    timeout_ms = settings.get('timeout_ms')
    if timeout_ms is not None and timeout_ms < 0:
        errors.append(f"timeout_ms must not be negative (got {timeout_ms})")

    return errors


def validate_config(config_file):
    """
    Validate a deployment config file.
    Returns (is_valid, errors_list)
    """
    config_path = Path(config_file)

    if not config_path.exists():
        return False, [f"File not found: {config_file}"]

    config, err = load_yaml(config_path)
    if err:
        return False, [f"YAML syntax error: {err}"]

    if not config:
        return False, ["Config file is empty"]

    return validate_against_schema(config)


def main():
    """Main validation entry point."""
    parser = argparse.ArgumentParser(description='Validate MMC deployment config using JSON schema')
    parser.add_argument('--file', default='config/deployment-config.yaml', help='Config file to validate')
    args = parser.parse_args()

    print("\n=== CONFIG VALIDATION (JSON Schema) ===")
    print(f"File: {args.file}\n")

    is_valid, errors = validate_config(args.file)

    if is_valid:
        print("[OK] Config is valid")
    else:
        print("[FAILED] Config validation failed")
        for error in errors:
            print(f"  - {error}")

    print(f"\n=== RESULT: {'PASSED' if is_valid else f'FAILED ({len(errors)} errors)'} ===\n")
    sys.exit(0 if is_valid else 1)


if __name__ == '__main__':
    main()
