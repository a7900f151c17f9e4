"""
Client startup module for SportsChaos.
Parses the command line, configures logging and runs the requested command.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from SportsChaos.config import Config
from SportsChaos.core.client.command_line_client import StandardCommandlineClient
from SportsChaos.core.client.utils.exceptions import ClientError
from SportsChaos.core.logging import auto_configure

__all__ = ['client', 'parse', 'main']

logger = logging.getLogger(__name__)


def parse(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='SportsChaos', description='SportsChaos session client')
    parser.add_argument('--base-url', default=Config.BASE_URL,
                        help=f'Auth service URL (default: {Config.BASE_URL})')
    parser.add_argument('--store', default=Config.STORE_FILE,
                        help=f'Session file (default: {Config.STORE_FILE})')
    subparsers = parser.add_subparsers(dest='command', required=True, help='Available commands')

    subparsers.add_parser('client', help='Interactive login / register / home screens')

    login_parser = subparsers.add_parser('login', help='Sign in')
    login_parser.add_argument('--email', help='Account email (prompted if omitted)')

    register_parser = subparsers.add_parser('register', help='Create an account')
    register_parser.add_argument('--name', help='Display name (prompted if omitted)')
    register_parser.add_argument('--email', help='Account email (prompted if omitted)')
    register_parser.add_argument('--phone', help='Phone number (optional)')

    subparsers.add_parser('status', help='Show and validate the stored session')
    subparsers.add_parser('logout', help='Forget the stored session')

    return parser.parse_args(argv)


async def client(args: argparse.Namespace) -> int:
    """
    Run one command against a freshly wired client.

    Returns:
        Process exit code
    """
    async with StandardCommandlineClient(args.base_url, args.store, Config.timeouts()) as _client:
        match args.command:
            case 'client':
                await _client.run()
                return 0
            case 'login':
                return 0 if await _client.login(email=args.email) else 1
            case 'register':
                ok = await _client.register(name=args.name, email=args.email, phone_number=args.phone or "")
                return 0 if ok else 1
            case 'status':
                return 0 if await _client.status() else 1
            case 'logout':
                await _client.logout()
                return 0
            case _:
                raise ValueError(f'Unknown command: {args.command}')


def main(argv: Optional[List[str]] = None) -> int:
    args = parse(argv)
    auto_configure(Config.ENV)
    try:
        return asyncio.run(client(args))
    except KeyboardInterrupt:
        print("\nBye!")
        return 130
    except ClientError as e:
        logger.debug("Command %s failed: %s", args.command, e)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
