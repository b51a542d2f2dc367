#!/usr/bin/env python3
"""
MMC Deployment Orchestrator
Publishes a packaged application to the MMC repository, deploys it to a
server or server group and waits until the deployment is DEPLOYED
"""

import argparse
import sys
import time
from pathlib import Path

from ..config.validation import check_settings, validate_against_schema
from ..errors import MmcError, PreconditionError, DeploymentError
from ..mmc_client import DEFAULT_REQUEST_TIMEOUT, MmcClient
from ..models import Artifact, TargetKind
from .manager import create_and_deploy, delete_deployment, find_deployment_id, get_deployment_state
from .poller import DEPLOYMENT_TIMEOUT_MS, DEPLOYMENT_WAIT_SLEEP_MS, wait_for_deployment
from .repository import publish_artifact
from .targets import get_server_ids_in_group, resolve_target
from .utils import (
    DEFAULT_CONFIG_PATH,
    artifact_path, check_artifact_file, get_mmc_credentials, load_config,
    print_deployment_summary, print_phase, timestamp_version
)


def deploy_application(client, artifact, target_name, deployment_name,
                       timeout_ms=DEPLOYMENT_TIMEOUT_MS, interval_ms=DEPLOYMENT_WAIT_SLEEP_MS,
                       clock=time.monotonic, sleep=time.sleep):
    """
    Resolve target -> publish artifact -> create and activate deployment -> poll.

    Any failure aborts the remaining steps and is raised as a DeploymentError
    whose __cause__ is the original exception.

    Returns:
        The activated Deployment
    """
    check_artifact_file(artifact.file_path)

    step = "resolve target"
    try:
        print_phase(1, f"RESOLVE TARGET ({target_name})")
        target = resolve_target(client, target_name)

        step = "publish artifact"
        print_phase(2, f"PUBLISH ({artifact.repository_name} {artifact.version})")
        published = publish_artifact(client, artifact)

        step = "create deployment"
        print_phase(3, f"DEPLOY ({deployment_name})")
        deployment = create_and_deploy(client, target.id, deployment_name, published.version_id)

        step = "wait for deployment"
        print_phase(4, f"WAIT FOR DEPLOYMENT (timeout {timeout_ms}ms)")
        wait_for_deployment(
            lambda deployment_id: get_deployment_state(client, deployment_id),
            deployment.id, published.version_id,
            timeout_ms=timeout_ms, interval_ms=interval_ms, clock=clock, sleep=sleep,
        )
    except Exception as e:
        raise DeploymentError(f"Error in attempting to deploy archive ({step}): {e}") from e

    print(f"\n✓ Application \"{Path(artifact.file_path).name}\" successfully deployed "
          f"in deployment \"{deployment_name}\".")
    return deployment


def resolve_settings(config, args, now=None):
    """Merge config file values with command line overrides."""
    mmc = config.get('mmc') or {}
    deployment = config.get('deployment') or {}

    def pick(arg_name, key, default=None):
        value = getattr(args, arg_name, None)
        if value is not None:
            return value
        return deployment.get(key, default)

    app_name = pick('app_name', 'app_name')
    version = pick('version', 'version')
    if getattr(args, 'timestamp_version', False) or (
            getattr(args, 'version', None) is None and deployment.get('use_timestamp_version')):
        version = timestamp_version(now)

    file_path = getattr(args, 'file', None)
    if file_path is None and app_name:
        file_path = str(artifact_path(pick('output_dir', 'output_directory', 'target'), app_name))

    return {
        'url': getattr(args, 'url', None) or mmc.get('url'),
        'request_timeout_s': mmc.get('request_timeout_s', DEFAULT_REQUEST_TIMEOUT),
        'file': file_path,
        'repository_app_name': pick('repository_app_name', 'repository_app_name') or app_name,
        'deployment_name': pick('deployment_name', 'deployment_name') or app_name,
        'version': version,
        'target': pick('target', 'target'),
        'timeout_ms': pick('timeout_ms', 'timeout_ms', DEPLOYMENT_TIMEOUT_MS),
    }


def build_client(settings):
    return MmcClient(settings['url'], settings['username'], settings['password'],
                     request_timeout=settings['request_timeout_s'])


def _fail(message):
    print(f"ERROR: {message}")
    sys.exit(1)


def _load_settings(args):
    """Load and validate config, resolve settings and credentials. Exits on failure."""
    try:
        config = load_config(args.config)
    except PreconditionError as e:
        _fail(e)

    is_valid, errors = validate_against_schema(config)
    if not is_valid:
        print("Config validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    settings = resolve_settings(config, args)
    try:
        settings['username'], settings['password'] = get_mmc_credentials(config.get('mmc'))
    except PreconditionError as e:
        _fail(e)
    return settings


def deploy_command(args):
    """Full run: publish, deploy and wait."""
    settings = _load_settings(args)
    errors = check_settings(settings)
    if errors:
        print("Deployment settings are incomplete:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    print_phase(None, "MULE APPLICATION DEPLOYMENT")
    print_deployment_summary(settings)

    artifact = Artifact(settings['repository_app_name'], settings['version'], settings['file'])
    try:
        deploy_application(
            build_client(settings), artifact, settings['target'], settings['deployment_name'],
            timeout_ms=settings['timeout_ms'],
        )
    except MmcError as e:
        _fail(e)

    print("=" * 60)
    print("DEPLOYMENT COMPLETE")
    print("=" * 60)


def validate_command(args):
    """Validate config and check the console is ready for deployment."""
    print_phase(None, "VALIDATING DEPLOYMENT PREREQUISITES")

    print("[1/3] Validating config file...")
    settings = _load_settings(args)
    print("  ✓ Config and credentials OK")

    print("[2/3] Checking deployment settings...")
    errors = check_settings(settings)
    if errors:
        for error in errors:
            print(f"✗ ERROR: {error}")
        sys.exit(1)
    print(f"  ✓ Artifact '{settings['file']}' found")

    print(f"[3/3] Resolving target '{settings['target']}' on {settings['url']}...")
    client = build_client(settings)
    try:
        target = resolve_target(client, settings['target'])
    except MmcError as e:
        _fail(e)

    print()
    print("=" * 60)
    print("✓ ALL VALIDATION CHECKS PASSED")
    print("=" * 60)
    print(f"Ready to deploy {settings['repository_app_name']} {settings['version']} "
          f"to {target.kind.value} '{target.name}'")


def targets_command(args):
    """Show what a target name resolves to."""
    settings = _load_settings(args)
    if not settings['target']:
        _fail("targets requires --target or deployment.target in config")

    client = build_client(settings)
    try:
        target = resolve_target(client, settings['target'])
        print(f"{target.kind.value}: {target.name} (id={target.id})")
        if target.kind == TargetKind.GROUP:
            server_ids = get_server_ids_in_group(client, target.name)
            print(f"Servers in group ({len(server_ids)}):")
            for server_id in server_ids:
                print(f"  - {server_id}")
    except MmcError as e:
        _fail(e)


def status_command(args):
    """Print the current state of a deployment."""
    settings = _load_settings(args)
    client = build_client(settings)
    try:
        deployment_id = find_deployment_id(client, settings['deployment_name'])
        if deployment_id is None:
            _fail(f"No deployment named '{settings['deployment_name']}' found")
        state = get_deployment_state(client, deployment_id)
    except MmcError as e:
        _fail(e)

    print(f"Deployment: {state.name} (id={deployment_id})")
    print(f"Status: {state.status}")
    print(f"Reconciled: {state.reconciled}")
    print(f"Href: {state.href}")


def undeploy_command(args):
    """Delete a deployment by name."""
    settings = _load_settings(args)
    client = build_client(settings)
    try:
        deleted = delete_deployment(client, settings['deployment_name'])
    except MmcError as e:
        _fail(e)

    if deleted is None:
        print(f"No deployment named '{settings['deployment_name']}' found, nothing to delete")


COMMANDS = {
    'deploy': deploy_command,
    'validate': validate_command,
    'targets': targets_command,
    'status': status_command,
    'undeploy': undeploy_command,
}


def build_parser():
    parser = argparse.ArgumentParser(
        description='MMC Deployment Orchestrator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Publish target/my-app.zip and deploy it to the Production group
  mmc-deploy deploy --app-name my-app --version 1.0.0-SNAPSHOT --target Production

  # Check config, credentials, artifact and target without deploying
  mmc-deploy validate

  # Inspect or remove a deployment
  mmc-deploy status --deployment-name my-app
  mmc-deploy undeploy --deployment-name my-app
        """
    )
    parser.add_argument('command', choices=list(COMMANDS), help='Deployment command')
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH, help='Deployment config file')
    parser.add_argument('--url', help='MMC API URL (e.g., https://mmc:8585/mmc-console/api)')
    parser.add_argument('--file', help='Packaged application (default: <output-dir>/<app-name>.zip)')
    parser.add_argument('--output-dir', dest='output_dir', help='Build output directory')
    parser.add_argument('--app-name', dest='app_name', help='Packaged application name without extension')
    parser.add_argument('--repository-app-name', dest='repository_app_name', help='Application name in the MMC repository')
    parser.add_argument('--deployment-name', dest='deployment_name', help='Name of the MMC deployment')
    parser.add_argument('--version', help='Application version in the repository')
    parser.add_argument('--timestamp-version', dest='timestamp_version', action='store_true',
                        help='Use the current time (MM-dd-yyyy-HH:mm:ss) as version')
    parser.add_argument('--target', help='Server or server group name')
    parser.add_argument('--timeout-ms', dest='timeout_ms', type=int, help='Deployment timeout in milliseconds')
    return parser


def main(argv=None):
    """Main entry point - parse command line and run command."""
    args = build_parser().parse_args(argv)
    COMMANDS[args.command](args)


if __name__ == '__main__':
    main()
