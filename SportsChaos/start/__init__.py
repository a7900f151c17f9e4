"""
Startup module for the SportsChaos client.
"""

from . import client

__all__ = ['client']
