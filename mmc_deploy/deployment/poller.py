#!/usr/bin/env python3
"""
Deployment status polling.

IN_PROGRESS -> poll again after one interval, unless the timeout has elapsed
DEPLOYED    -> done
anything else -> failed, no further polls
"""

import time

from ..errors import DeploymentTimeoutError, UnexpectedDeploymentStatusError

DEPLOYMENT_TIMEOUT_MS = 30000
DEPLOYMENT_WAIT_SLEEP_MS = 500


def wait_for_deployment(get_state, deployment_id, version_id,
                        timeout_ms=DEPLOYMENT_TIMEOUT_MS, interval_ms=DEPLOYMENT_WAIT_SLEEP_MS,
                        clock=time.monotonic, sleep=time.sleep):
    """
    Poll get_state(deployment_id) until the deployment reaches DEPLOYED.

    Args:
        get_state: Callable returning a DeploymentState for a deployment id
        deployment_id: Deployment being activated
        version_id: Repository version id, reported on timeout
        timeout_ms: Bound on time spent while the status stays IN_PROGRESS
        interval_ms: Sleep between polls
        clock: Returns seconds as a float (time.monotonic)
        sleep: Sleeps for a number of seconds (time.sleep)

    Returns:
        The DEPLOYED DeploymentState
    """
    start = clock()
    polls = 0

    while True:
        state = get_state(deployment_id)
        polls += 1

        if state.in_progress:
            elapsed_ms = (clock() - start) * 1000
            print(f"  [{polls}] {deployment_id}: {state.status} ({int(elapsed_ms)}ms elapsed)")
            if elapsed_ms > timeout_ms:
                raise DeploymentTimeoutError(deployment_id, version_id, timeout_ms, elapsed_ms)
            sleep(interval_ms / 1000.0)
            continue

        if state.deployed:
            print(f"  [{polls}] {deployment_id}: {state.status}")
            return state

        raise UnexpectedDeploymentStatusError(deployment_id, state.status)
