"""
Entry point for the SportsChaos client.
This module provides a command-line interface to sign in, register,
check or clear the stored session.
"""

import sys

from SportsChaos.start.client import main

if __name__ == '__main__':
    sys.exit(main())
