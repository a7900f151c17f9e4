"""
Test package for the SportsChaos session client.
"""
