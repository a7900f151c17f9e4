"""
HTTP client for the remote auth service.
"""

from .client import AuthGateway, GatewayTimeouts

__all__ = ['AuthGateway', 'GatewayTimeouts']
