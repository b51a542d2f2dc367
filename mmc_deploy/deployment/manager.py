#!/usr/bin/env python3
"""
Deployment management: replace, create and activate MMC deployments.
"""

from ..errors import MmcError
from ..models import Deployment, DeploymentState
from ..responses import call, find_by_name, list_data, process_response
from .utils import replace_existing


def find_deployment_id(client, deployment_name):
    """Returns the id of the first deployment named deployment_name, or None."""
    deployment = find_by_name(list_data(client.get, 'deployments'), deployment_name)
    return deployment.get('id') if deployment else None


def delete_deployment_by_id(client, deployment_id):
    process_response(*client.delete('deployments', deployment_id), url=f"deployments/{deployment_id}")


def delete_deployment(client, deployment_name):
    """Delete a deployment by name. Returns the deleted id or None."""
    return replace_existing(
        lambda: find_deployment_id(client, deployment_name),
        lambda deployment_id: delete_deployment_by_id(client, deployment_id),
        description=f"deployment '{deployment_name}'",
    )


def create_deployment(client, target_id, deployment_name, version_id):
    """
    Create a deployment without activating it.

    The target id goes in the 'servers' slot whether it names a group or a
    single server.
    """
    body = {
        'name': deployment_name,
        'servers': [target_id],
        'applications': [version_id],
    }
    payload = call(client.post, 'deployments', json_body=body)
    deployment_id = payload.get('id')
    if not deployment_id:
        raise MmcError(f"Creating deployment '{deployment_name}' returned no id: {payload}")

    print(f"✓ Deployment successfully created with id \"{deployment_id}\"")
    return deployment_id


def activate_deployment(client, deployment_id):
    """Ask MMC to deploy; success only means the request was accepted."""
    status_code, body = client.post('deployments', deployment_id, 'deploy')
    answer = process_response(status_code, body, f"deployments/{deployment_id}/deploy")
    print(f"Application deployed with answer \"{answer}\"")


def get_deployment_state(client, deployment_id):
    return DeploymentState.from_payload(call(client.get, 'deployments', deployment_id))


def create_and_deploy(client, target_id, deployment_name, version_id):
    """Replace any deployment with the same name, create a new one and activate it."""
    delete_deployment(client, deployment_name)
    deployment_id = create_deployment(client, target_id, deployment_name, version_id)
    activate_deployment(client, deployment_id)
    return Deployment(deployment_name, deployment_id, target_id, version_id)
