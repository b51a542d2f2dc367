#!/usr/bin/env python3
"""
Value types for one deployment run: target, artifact, published version,
deployment and polled deployment state.
"""

from dataclasses import dataclass
from enum import Enum

SNAPSHOT_MARKER = "SNAPSHOT"


class TargetKind(Enum):
    GROUP = "group"
    SERVER = "server"


class DeploymentStatus(Enum):
    IN_PROGRESS = "IN_PROGRESS"
    DEPLOYED = "DEPLOYED"


@dataclass(frozen=True)
class Target:
    name: str
    kind: TargetKind
    id: str


@dataclass(frozen=True)
class Artifact:
    repository_name: str
    version: str
    file_path: str

    @property
    def is_snapshot(self):
        return is_snapshot_version(self.version)


@dataclass(frozen=True)
class PublishedVersion:
    version_id: str


@dataclass(frozen=True)
class Deployment:
    name: str
    id: str
    target_id: str
    version_id: str


@dataclass(frozen=True)
class DeploymentState:
    status: str
    reconciled: bool = False
    href: str = None
    name: str = None

    @classmethod
    def from_payload(cls, payload):
        """Build from a deployment record; unknown fields are ignored."""
        return cls(
            status=str(payload.get('status') or '').upper(),
            reconciled=payload.get('reconciled') is True,
            href=payload.get('href'),
            name=payload.get('name'),
        )

    @property
    def in_progress(self):
        return self.status == DeploymentStatus.IN_PROGRESS.value

    @property
    def deployed(self):
        return self.status == DeploymentStatus.DEPLOYED.value


def is_snapshot_version(version):
    return SNAPSHOT_MARKER in version
