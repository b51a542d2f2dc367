"""
Deployment and orchestration package.

This package contains modules for resolving deployment targets, publishing
application archives, managing MMC deployments and waiting for them to
become DEPLOYED.
"""

__all__ = ['orchestrator', 'targets', 'repository', 'manager', 'poller', 'utils']
