"""
Session repository: the only place that turns a remote auth result into
a stored session.
"""

import logging
from typing import TYPE_CHECKING, Dict, Optional

from .models import (
    AuthOutcome,
    Credentials,
    Failed,
    Ok,
    RegistrationRequest,
    StoredSessionRecord,
    UserProfile,
)
from ..utils.exceptions import AuthenticationError, PersistenceError

if TYPE_CHECKING:
    from SportsChaos.api.client import AuthGateway
    from SportsChaos.core.client.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class SessionRepository:
    """
    Coordinates the auth gateway with the credential store.

    Keeps no session state of its own: every question about the current
    user is answered by the store, so any number of controllers sharing
    one store agree on who is signed in.
    """

    def __init__(self, gateway: 'AuthGateway', store: 'CredentialStore'):
        """
        Args:
            gateway: Remote auth service client
            store: Persistent credential store
        """
        self._gateway = gateway
        self._store = store

    async def login(self, email: str, password: str) -> AuthOutcome:
        """
        Sign in and persist the resulting session.

        The session is stored before this returns, so ``is_logged_in``
        is true as soon as an ``Ok`` comes back.

        Raises:
            PersistenceError: if the server accepted the credentials but
                the session could not be stored
        """
        outcome = await self._gateway.login(Credentials(email=email, password=password))
        return await self._persist(outcome, "login")

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
    ) -> AuthOutcome:
        """
        Create an account and persist the resulting session.

        Raises:
            PersistenceError: as for ``login``
        """
        request = RegistrationRequest(name=name, email=email, password=password, phone_number=phone_number)
        outcome = await self._gateway.register(request)
        return await self._persist(outcome, "register")

    async def _persist(self, outcome: AuthOutcome, action: str) -> AuthOutcome:
        match outcome:
            case Ok(session=session):
                try:
                    await self._store.write(StoredSessionRecord.from_session(session))
                except PersistenceError:
                    logger.error("%s succeeded remotely but the session could not be stored", action)
                    raise
                logger.info("%s succeeded for user %s", action, session.user_id)
            case Failed(reason=reason):
                logger.info("%s failed: %s", action, reason)
        return outcome

    async def is_logged_in(self) -> bool:
        record = await self._store.current()
        return record is not None and record.is_logged_in

    async def logout(self) -> None:
        """Forget the stored session. Storage errors are logged, not raised."""
        try:
            await self._store.clear()
        except PersistenceError as e:
            logger.warning("Logout could not clear the stored session: %s", e)
        else:
            logger.info("Logged out")

    async def current_token(self) -> Optional[str]:
        record = await self._store.current()
        if record is None or not record.token:
            return None
        return record.token

    async def current_user(self) -> Optional[UserProfile]:
        record = await self._store.current()
        if record is None or not record.is_logged_in:
            return None
        return record.profile

    async def authorization_header(self) -> Dict[str, str]:
        """
        Header for calls that need the signed-in user.

        Raises:
            AuthenticationError: if nobody is signed in
        """
        token = await self.current_token()
        if token is None:
            raise AuthenticationError("Not logged in")
        return {"Authorization": f"Bearer {token}"}

    async def validate_session(self) -> AuthOutcome:
        """Check the stored token with the server. The store is not modified."""
        token = await self.current_token()
        if token is None:
            return Failed("Not logged in")
        return await self._gateway.validate_token(token)


__all__ = ['SessionRepository']
