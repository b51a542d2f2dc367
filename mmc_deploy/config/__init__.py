"""
Configuration validation package.

Validates deployment-config.yaml against its JSON schema and checks the
inputs a deployment needs before any remote call is made.
"""

__all__ = ['validation']
