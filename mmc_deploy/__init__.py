"""
MMC deployment tooling.

Publishes packaged applications to a Mule Management Console repository,
deploys them to servers or server groups and waits for the result.
"""

__version__ = "1.0.0"
