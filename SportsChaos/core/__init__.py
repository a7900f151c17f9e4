"""
Core of the SportsChaos session client: authentication, storage, logging.
"""
