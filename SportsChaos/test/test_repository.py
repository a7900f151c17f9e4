"""
Unit tests for the session repository.

Tests cover:
- Persisting a session before returning success
- Leaving the store alone on failure
- Propagating storage failures after a remote success
- Logout, token access and validation delegated to the store
"""

from unittest.mock import AsyncMock

import pytest

from SportsChaos.core.client.auth.models import (
    Credentials,
    Failed,
    Ok,
    RegistrationRequest,
    StoredSessionRecord,
    UserProfile,
)
from SportsChaos.core.client.auth.repository import SessionRepository
from SportsChaos.core.client.services.credential_store import CredentialStore
from SportsChaos.core.client.utils.exceptions import AuthenticationError, PersistenceError


class TestLoginAndRegister:
    """Tests for the calls that create a session."""

    @pytest.mark.asyncio
    async def test_login_success_is_stored_before_returning(self, repository, gateway, sample_session):
        """Test that is_logged_in is true right after an Ok."""
        gateway.login.return_value = Ok(sample_session)

        outcome = await repository.login("a@b.com", "secret")

        assert outcome == Ok(sample_session)
        assert await repository.is_logged_in() is True
        assert await repository.current_token() == "abc"
        gateway.login.assert_awaited_once_with(Credentials(email="a@b.com", password="secret"))

    @pytest.mark.asyncio
    async def test_login_failure_leaves_store_untouched(self, repository, gateway, store, other_record):
        await store.write(other_record)
        gateway.login.return_value = Failed("Invalid credentials")

        outcome = await repository.login("a@b.com", "wrong")

        assert outcome == Failed("Invalid credentials")
        assert await store.current() == other_record

    @pytest.mark.asyncio
    async def test_login_failure_on_empty_store(self, repository, gateway):
        gateway.login.return_value = Failed("timeout")

        await repository.login("a@b.com", "secret")

        assert await repository.is_logged_in() is False

    @pytest.mark.asyncio
    async def test_register_success_is_stored(self, repository, gateway, store, sample_session):
        gateway.register.return_value = Ok(sample_session)

        outcome = await repository.register("A", "a@b.com", "secret1", "555")

        assert outcome == Ok(sample_session)
        assert await store.current() == StoredSessionRecord.from_session(sample_session)
        gateway.register.assert_awaited_once_with(
            RegistrationRequest(name="A", email="a@b.com", password="secret1", phone_number="555")
        )

    @pytest.mark.asyncio
    async def test_register_failure_leaves_store_untouched(self, repository, gateway, store):
        gateway.register.return_value = Failed("Email already registered")

        outcome = await repository.register("A", "a@b.com", "secret1")

        assert outcome == Failed("Email already registered")
        assert await store.current() is None

    @pytest.mark.asyncio
    async def test_store_failure_after_success_propagates(self, gateway, sample_session):
        store = AsyncMock(spec=CredentialStore)
        store.write.side_effect = PersistenceError("Failed to save session")
        repository = SessionRepository(gateway, store)
        gateway.login.return_value = Ok(sample_session)

        with pytest.raises(PersistenceError):
            await repository.login("a@b.com", "secret")


class TestSessionState:
    """Tests for reads, logout and validation."""

    @pytest.mark.asyncio
    async def test_logout_twice_leaves_store_empty(self, repository, store, other_record):
        """Test that logout is idempotent."""
        await store.write(other_record)

        await repository.logout()
        await repository.logout()

        assert await store.current() is None
        assert await repository.is_logged_in() is False
        assert await repository.current_token() is None

    @pytest.mark.asyncio
    async def test_logout_swallows_store_errors(self, gateway):
        store = AsyncMock(spec=CredentialStore)
        store.clear.side_effect = PersistenceError("Failed to clear session")
        repository = SessionRepository(gateway, store)

        await repository.logout()

        store.clear.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_token_is_not_logged_in(self, repository, store):
        await store.write(StoredSessionRecord(token="", user_id=1, email="a@b.com", name="A", role="USER"))

        assert await repository.is_logged_in() is False
        assert await repository.current_token() is None
        assert await repository.current_user() is None

    @pytest.mark.asyncio
    async def test_reads_existing_file_on_first_use(self, gateway, store_path, other_record):
        await CredentialStore(store_path).write(other_record)
        repository = SessionRepository(gateway, CredentialStore(store_path))

        assert await repository.is_logged_in() is True
        assert await repository.current_user() == UserProfile(user_id=7, email="old@b.com", name="Old", role="ADMIN")

    @pytest.mark.asyncio
    async def test_repositories_sharing_a_store_agree(self, gateway, store, sample_session):
        """Test that no repository keeps its own copy of the session."""
        first = SessionRepository(gateway, store)
        second = SessionRepository(gateway, store)
        gateway.login.return_value = Ok(sample_session)

        await first.login("a@b.com", "secret")
        assert await second.is_logged_in() is True

        await second.logout()
        assert await first.is_logged_in() is False

    @pytest.mark.asyncio
    async def test_authorization_header(self, repository, store, other_record):
        await store.write(other_record)

        assert await repository.authorization_header() == {"Authorization": "Bearer old-token"}

    @pytest.mark.asyncio
    async def test_authorization_header_without_session(self, repository):
        with pytest.raises(AuthenticationError):
            await repository.authorization_header()

    @pytest.mark.asyncio
    async def test_validate_session_uses_stored_token(self, repository, gateway, store, other_record, sample_session):
        await store.write(other_record)
        gateway.validate_token.return_value = Ok(sample_session)

        outcome = await repository.validate_session()

        assert outcome == Ok(sample_session)
        gateway.validate_token.assert_awaited_once_with("old-token")
        assert await store.current() == other_record

    @pytest.mark.asyncio
    async def test_validate_session_without_token(self, repository, gateway):
        outcome = await repository.validate_session()

        assert outcome == Failed("Not logged in")
        gateway.validate_token.assert_not_awaited()
