"""
Client module for SportsChaos.
Provides the session core (auth, services) and the command-line front end.
"""
