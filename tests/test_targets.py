"""
Tests for server group / server target resolution.
"""

import pytest

from mmc_deploy.deployment.targets import get_server_ids_in_group, resolve_target
from mmc_deploy.errors import MmcError, MmcResponseError, PreconditionError, TargetNotFoundError
from mmc_deploy.models import TargetKind
from tests.conftest import listing

GROUPS = listing(
    {'name': 'Production', 'id': 'g-prod'},
    {'name': 'Staging', 'id': 'g-stage'},
)
SERVERS = listing(
    {'name': 'node-1', 'id': 's-1', 'groups': [{'name': 'Production', 'id': 'g-prod'}]},
    {'name': 'node-2', 'id': 's-2', 'groups': [{'name': 'Production'}, {'name': 'Staging'}]},
    {'name': 'Staging', 'id': 's-3', 'groups': []},
)


@pytest.fixture
def console(mmc):
    mmc.respond('GET', 'serverGroups', (200, GROUPS))
    mmc.respond('GET', 'servers', (200, SERVERS))
    return mmc


class TestResolveTarget:

    def test_group_match_short_circuits(self, console):
        target = resolve_target(console, 'Production')

        assert target.kind is TargetKind.GROUP
        assert target.id == 'g-prod'
        assert target.name == 'Production'
        assert console.requests_made() == [('GET', 'serverGroups')]

    def test_group_wins_over_server_with_same_name(self, console):
        target = resolve_target(console, 'Staging')

        assert target.kind is TargetKind.GROUP
        assert target.id == 'g-stage'

    def test_server_match(self, console):
        target = resolve_target(console, 'node-2')

        assert target.kind is TargetKind.SERVER
        assert target.id == 's-2'
        assert console.requests_made() == [('GET', 'serverGroups'), ('GET', 'servers')]

    def test_no_match_raises_not_found(self, console):
        with pytest.raises(TargetNotFoundError, match='No group or server named "nowhere" found'):
            resolve_target(console, 'nowhere')

    def test_not_found_is_a_precondition_failure(self, console):
        with pytest.raises(PreconditionError):
            resolve_target(console, 'nowhere')

    def test_matching_is_exact(self, console):
        with pytest.raises(TargetNotFoundError):
            resolve_target(console, 'production')

    def test_first_listed_match_wins(self, mmc):
        mmc.respond('GET', 'serverGroups', (200, listing(
            {'name': 'dup', 'id': 'first'},
            {'name': 'dup', 'id': 'second'},
        )))

        assert resolve_target(mmc, 'dup').id == 'first'

    def test_listing_failure_propagates(self, mmc):
        mmc.respond('GET', 'serverGroups', (500, ''))

        with pytest.raises(MmcResponseError):
            resolve_target(mmc, 'Production')

    def test_empty_listings(self, mmc):
        mmc.respond('GET', 'serverGroups', (200, {}))
        mmc.respond('GET', 'servers', (200, listing()))

        with pytest.raises(TargetNotFoundError):
            resolve_target(mmc, 'Production')


class TestServerIdsInGroup:

    def test_members_are_collected(self, console):
        assert get_server_ids_in_group(console, 'Production') == ['s-1', 's-2']

    def test_unknown_group(self, console):
        assert get_server_ids_in_group(console, 'QA') == []

    def test_group_listing_that_is_not_an_object(self, mmc):
        mmc.respond('GET', 'serverGroups', (200, []))

        with pytest.raises(MmcError, match="not an object"):
            resolve_target(mmc, 'Production')
