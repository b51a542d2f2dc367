#!/usr/bin/env python3
"""
Artifact publishing to the MMC application repository.

Snapshot versions are deleted before upload so they can be republished;
release versions are never deleted here and a duplicate upload surfaces as a
CONFLICT from the console.
"""

from pathlib import Path

from ..errors import MmcError
from ..models import PublishedVersion
from ..responses import call, find_by_name, list_data, process_response
from .utils import replace_existing


def find_application_version_id(client, name, version):
    """Scan repository applications for name, then its versions for version."""
    application = find_by_name(list_data(client.get, 'repository'), name)
    if application is None:
        return None
    match = find_by_name(application.get('versions') or [], version)
    return match.get('id') if match else None


def delete_application_version(client, version_id):
    process_response(*client.delete('repository', version_id), url=f"repository/{version_id}")


def upload_application(client, name, version, file_path):
    """
    Upload a packaged application as multipart parts name, version and file.

    Returns:
        The versionId assigned by the repository
    """
    file_path = Path(file_path)
    print(f"Uploading {file_path.name} to repository as {name} {version}")

    with open(file_path, 'rb') as f:
        payload = call(
            client.post_multipart, 'repository',
            data={'name': name, 'version': version},
            files={'file': (file_path.name, f, 'application/octet-stream')},
        )

    version_id = payload.get('versionId')
    if not version_id:
        raise MmcError(f"Repository upload of {name} {version} returned no versionId: {payload}")

    print(f"✓ Upload successful (versionId={version_id})")
    return version_id


def publish_artifact(client, artifact):
    """Publish an Artifact and return its PublishedVersion."""
    if artifact.is_snapshot:
        replace_existing(
            lambda: find_application_version_id(client, artifact.repository_name, artifact.version),
            lambda version_id: delete_application_version(client, version_id),
            description=f"snapshot {artifact.repository_name} {artifact.version}",
        )

    version_id = upload_application(client, artifact.repository_name, artifact.version, artifact.file_path)
    return PublishedVersion(version_id)
