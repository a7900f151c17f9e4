"""
SportsChaos session client.

Signs users in and out of the SportsChaos auth service, keeps the
resulting session on disk and exposes login/register screen state for a
front end to render.
"""

__version__ = "1.0.0"
