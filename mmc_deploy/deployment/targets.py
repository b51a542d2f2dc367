#!/usr/bin/env python3
"""
Target resolution: map a server group or server name to its MMC id.
Group names win over server names.
"""

from ..errors import TargetNotFoundError
from ..models import Target, TargetKind
from ..responses import find_by_name, list_data


def get_server_group_id(client, group_name):
    """Returns id of given group name or None if not found."""
    group = find_by_name(list_data(client.get, 'serverGroups'), group_name)
    return group.get('id') if group else None


def get_server_id(client, server_name):
    """Returns id of given server name or None if not found."""
    server = find_by_name(list_data(client.get, 'servers'), server_name)
    return server.get('id') if server else None


def resolve_target(client, target_name):
    """
    Resolve a server group or server name to a Target.

    The group listing is consulted first and a match there returns without
    querying servers. Raises TargetNotFoundError when neither matches.
    """
    group_id = get_server_group_id(client, target_name)
    if group_id:
        print(f"✓ Target '{target_name}' is a server group (id={group_id})")
        return Target(target_name, TargetKind.GROUP, group_id)

    server_id = get_server_id(client, target_name)
    if server_id:
        print(f"✓ Target '{target_name}' is a server (id={server_id})")
        return Target(target_name, TargetKind.SERVER, server_id)

    raise TargetNotFoundError(target_name)


def get_server_ids_in_group(client, group_name):
    """Returns sorted ids of all servers that are members of the given group."""
    server_ids = set()
    for server in list_data(client.get, 'servers'):
        for group in server.get('groups') or []:
            if group.get('name') == group_name:
                server_ids.add(server.get('id'))
    return sorted(server_ids)
