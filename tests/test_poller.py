"""
Tests for deployment status polling with an injected clock.
"""

import pytest

from mmc_deploy.deployment.poller import wait_for_deployment
from mmc_deploy.errors import DeploymentTimeoutError, UnexpectedDeploymentStatusError
from mmc_deploy.models import DeploymentState


def status_sequence(*statuses):
    """get_state callable serving statuses in order, repeating the last one."""
    remaining = list(statuses)
    polled = []

    def get_state(deployment_id):
        polled.append(deployment_id)
        status = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        return DeploymentState(status=status, name='orders')

    get_state.polled = polled
    return get_state


class TestWaitForDeployment:

    def test_in_progress_twice_then_deployed(self, clock):
        get_state = status_sequence('IN_PROGRESS', 'IN_PROGRESS', 'DEPLOYED')

        state = wait_for_deployment(get_state, 'd-1', 'v-1', timeout_ms=30000, interval_ms=500,
                                    clock=clock, sleep=clock.sleep)

        assert state.deployed
        assert get_state.polled == ['d-1', 'd-1', 'd-1']
        assert clock.sleeps == [0.5, 0.5]
        assert clock.now * 1000 >= 1000

    def test_deployed_on_first_poll(self, clock):
        get_state = status_sequence('DEPLOYED')

        wait_for_deployment(get_state, 'd-1', 'v-1', clock=clock, sleep=clock.sleep)

        assert len(get_state.polled) == 1
        assert clock.sleeps == []

    def test_timeout_while_in_progress(self, clock):
        get_state = status_sequence('IN_PROGRESS')

        with pytest.raises(DeploymentTimeoutError) as exc_info:
            wait_for_deployment(get_state, 'd-1', 'v-1', timeout_ms=30000, interval_ms=500,
                                clock=clock, sleep=clock.sleep)

        error = exc_info.value
        assert error.deployment_id == 'd-1'
        assert error.version_id == 'v-1'
        assert '30000ms' in str(error)
        assert error.elapsed_ms == 30500
        assert 'after 30500ms' in str(error)
        assert clock.now * 1000 > 30000
        assert clock.now * 1000 <= 30000 + 500

    def test_unexpected_status_fails_immediately(self, clock):
        get_state = status_sequence('IN_PROGRESS', 'FAILED', 'DEPLOYED')

        with pytest.raises(UnexpectedDeploymentStatusError) as exc_info:
            wait_for_deployment(get_state, 'd-1', 'v-1', clock=clock, sleep=clock.sleep)

        assert exc_info.value.status == 'FAILED'
        assert 'd-1' in str(exc_info.value)
        assert len(get_state.polled) == 2
        assert clock.sleeps == [0.5]

    def test_unknown_status_is_not_waited_on(self, clock):
        get_state = status_sequence('UNDEPLOYING')

        with pytest.raises(UnexpectedDeploymentStatusError):
            wait_for_deployment(get_state, 'd-1', 'v-1', clock=clock, sleep=clock.sleep)

        assert clock.sleeps == []

    def test_missing_status_is_unexpected(self, clock):
        def get_state(deployment_id):
            return DeploymentState.from_payload({'name': 'orders'})

        with pytest.raises(UnexpectedDeploymentStatusError):
            wait_for_deployment(get_state, 'd-1', 'v-1', clock=clock, sleep=clock.sleep)

    def test_zero_timeout_still_polls_once(self, clock):
        get_state = status_sequence('DEPLOYED')

        state = wait_for_deployment(get_state, 'd-1', 'v-1', timeout_ms=0, clock=clock, sleep=clock.sleep)

        assert state.deployed

    def test_timeout_reports_elapsed_time(self, clock):
        def slow_state(deployment_id):
            clock.now += 2.0
            return DeploymentState(status='IN_PROGRESS')

        with pytest.raises(DeploymentTimeoutError) as exc_info:
            wait_for_deployment(slow_state, 'd-1', 'v-1', timeout_ms=1000, clock=clock, sleep=clock.sleep)

        assert exc_info.value.elapsed_ms == 2000
        assert exc_info.value.timeout_ms == 1000
        assert 'after 2000ms' in str(exc_info.value)
        assert clock.sleeps == []
