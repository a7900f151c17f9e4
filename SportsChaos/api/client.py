"""
Auth gateway: the HTTP boundary to the remote authentication service.

Every call makes exactly one request and folds whatever happens (a
server-side rejection, a timeout, an unreadable body) into an
``AuthOutcome``. Nothing here raises for a failed request.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from SportsChaos.core.client.auth.models import (
    AuthenticatedSession,
    AuthOutcome,
    Credentials,
    Envelope,
    Failed,
    Ok,
    RegistrationRequest,
)
from SportsChaos.core.client.utils.constants import (
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_BASE_URL,
    LOGIN_ENDPOINT,
    READ_TIMEOUT_SECONDS,
    REGISTER_ENDPOINT,
    VALIDATE_ENDPOINT,
    WRITE_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

TIMEOUT_REASON = "timeout"


@dataclass(frozen=True)
class GatewayTimeouts:
    """
    Per-call ceilings in seconds.

    aiohttp has no socket-write timeout of its own, so the write ceiling
    is enforced through the total budget of connect + write + read.
    """
    connect: float = CONNECT_TIMEOUT_SECONDS
    read: float = READ_TIMEOUT_SECONDS
    write: float = WRITE_TIMEOUT_SECONDS

    def to_client_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.connect + self.write + self.read,
            sock_connect=self.connect,
            sock_read=self.read,
        )


class AuthGateway:
    """
    Client for the login, register and validate-token endpoints.

    The gateway either receives an ``aiohttp.ClientSession`` from its
    owner or creates one on first use; in the latter case ``close``
    releases it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeouts: Optional[GatewayTimeouts] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the gateway.

        Args:
            base_url (str): Root URL of the auth service
            timeouts (GatewayTimeouts): Connect/read/write ceilings
            session (aiohttp.ClientSession): Shared HTTP session, if the
                caller manages one
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.timeouts = timeouts or GatewayTimeouts()
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> 'AuthGateway':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            # A closed injected session is replaced by one this gateway owns
            self._session = aiohttp.ClientSession(
                timeout=self.timeouts.to_client_timeout(),
                trust_env=False,
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this gateway created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    @property
    def is_closed(self) -> bool:
        return self._session is None or self._session.closed

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint.lstrip('/')}"

    async def _make_request(
        self,
        endpoint: str,
        fallback: str,
        method: str = "GET",
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> AuthOutcome:
        """
        Make one HTTP request and decode the envelope.

        Args:
            endpoint (str): Path relative to the base URL
            fallback (str): Failure message when the server gives none
            method (str): HTTP method to use
            data (dict): JSON body
            headers (dict): Extra headers

        Returns:
            AuthOutcome: ``Ok`` with the session, or ``Failed``
        """
        url = self._url(endpoint)
        try:
            session = await self._get_session()
            async with session.request(
                method=method,
                url=url,
                json=data,
                headers=headers,
                timeout=self.timeouts.to_client_timeout(),
            ) as response:
                logger.debug("%s %s -> %s", method, url, response.status)
                try:
                    payload = await response.json(content_type=None)
                    envelope = Envelope.from_payload(payload)
                except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
                    if 200 <= response.status < 300:
                        return Failed(f"Malformed response: {e}")
                    return Failed(response.reason or fallback)

                return self._to_outcome(response.status, response.reason, envelope, fallback)

        except asyncio.TimeoutError:
            logger.info("%s %s timed out", method, url)
            return Failed(TIMEOUT_REASON)
        except aiohttp.ClientConnectionError as e:
            logger.info("%s %s connection failed: %s", method, url, e)
            return Failed(f"Connection failed: {e}")
        except aiohttp.ClientError as e:
            logger.info("%s %s failed: %s", method, url, e)
            return Failed(f"Request failed: {e}")

    @staticmethod
    def _to_outcome(status: int, reason: Optional[str], envelope: Envelope, fallback: str) -> AuthOutcome:
        if 200 <= status < 300 and envelope.data is not None:
            try:
                return Ok(AuthenticatedSession.from_payload(envelope.data))
            except ValueError as e:
                return Failed(f"Malformed response: {e}")

        if envelope.message:
            return Failed(envelope.message)
        if not 200 <= status < 300 and reason:
            return Failed(reason)
        return Failed(fallback)

    async def login(self, credentials: Credentials) -> AuthOutcome:
        """
        Submit credentials.

        Args:
            credentials (Credentials): Email and password

        Returns:
            AuthOutcome: the session on success
        """
        return await self._make_request(
            LOGIN_ENDPOINT,
            "Login failed",
            method="POST",
            data=credentials.to_payload(),
        )

    async def register(self, request: RegistrationRequest) -> AuthOutcome:
        """
        Create an account.

        Args:
            request (RegistrationRequest): New account details

        Returns:
            AuthOutcome: the session of the new account on success
        """
        return await self._make_request(
            REGISTER_ENDPOINT,
            "Registration failed",
            method="POST",
            data=request.to_payload(),
        )

    async def validate_token(self, token: str) -> AuthOutcome:
        """Ask the server whether ``token`` is still valid."""
        return await self._make_request(
            VALIDATE_ENDPOINT,
            "Token validation failed",
            headers={"Authorization": f"Bearer {token}"},
        )


__all__ = ["AuthGateway", "GatewayTimeouts", "TIMEOUT_REASON"]
