#!/usr/bin/env python3
"""
Exception hierarchy for MMC deployments.

Library code raises these; the CLI layer turns them into an ERROR line
and a non-zero exit code.
"""


class MmcError(Exception):
    """Base class for every failure raised by mmc_deploy."""


class MmcTransportError(MmcError):
    """The HTTP request never produced a response."""

    def __init__(self, method, url, cause):
        super().__init__(f"{method} {url} failed: {cause}")
        self.method = method
        self.url = url


class MmcResponseError(MmcError):
    """The management console answered with a non-success status code."""

    def __init__(self, kind, status_code, body=None, url=None):
        super().__init__(kind.describe(status_code, body))
        self.kind = kind
        self.status_code = status_code
        self.body = body
        self.url = url


class PreconditionError(MmcError):
    """A required input is missing or invalid (file, credentials, settings)."""


class TargetNotFoundError(PreconditionError):

    def __init__(self, target_name):
        super().__init__(f'No group or server named "{target_name}" found')
        self.target_name = target_name


class DeploymentTimeoutError(MmcError):

    def __init__(self, deployment_id, version_id, timeout_ms, elapsed_ms):
        super().__init__(
            f'Timeout of "{timeout_ms}ms" occurred while waiting for application '
            f'"{version_id}" to be deployed (deployment "{deployment_id}", '
            f'still in progress after {int(elapsed_ms)}ms)'
        )
        self.deployment_id = deployment_id
        self.version_id = version_id
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms


class UnexpectedDeploymentStatusError(MmcError):

    def __init__(self, deployment_id, status):
        super().__init__(
            f'Failed to deploy application with deployment id "{deployment_id}", '
            f'unexpected deployment state "{status}"'
        )
        self.deployment_id = deployment_id
        self.status = status


class DeploymentError(MmcError):
    """Wraps whatever aborted an orchestration run; the cause is chained."""
