"""
Login and register screen controllers.

Each controller is a small state machine::

    Idle -> Loading -> Success | Error -> (reset) -> Idle

Input is validated before anything touches the network; a validation
failure goes straight to ``Error`` without passing through ``Loading``.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from .models import AuthOutcome, Failed, Ok
from .repository import SessionRepository
from .state import Error, Idle, Loading, ObservableValue, ScreenState, Success, assert_never
from ..utils.constants import LOGIN_FAILED_FALLBACK, MIN_PASSWORD_LENGTH, REGISTER_FAILED_FALLBACK
from ..utils.exceptions import ClientError

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class ScreenController:
    """
    Shared state handling for the auth screens.

    Subclasses validate their own input and then hand the repository
    call to ``_launch``, which runs it as a task on the current event
    loop and maps its outcome to the next state.
    """

    fallback_message = "Something went wrong. Please try again."

    def __init__(self, repository: SessionRepository):
        self._repository = repository
        self._state: ObservableValue[ScreenState] = ObservableValue(Idle())
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def state(self) -> ObservableValue[ScreenState]:
        """Observable screen state; subscribe to be told of every change."""
        return self._state

    @property
    def is_busy(self) -> bool:
        return isinstance(self._state.value, Loading)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def reset(self) -> None:
        """Dismiss the current result and go back to ``Idle``."""
        self._state.set(Idle())

    def close(self) -> None:
        """
        Detach the controller from its screen.

        Calls already in flight still complete, but their results are
        dropped instead of being published.
        """
        self._closed = True

    def _can_submit(self) -> bool:
        current = self._state.value
        if isinstance(current, (Idle, Error)):
            return True
        logger.debug("%s ignored submit while %s", type(self).__name__, type(current).__name__)
        return False

    def _reject(self, message: str) -> None:
        self._state.set(Error(message))

    def _launch(self, call: Callable[[], Awaitable[AuthOutcome]]) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        self._state.set(Loading())
        task = loop.create_task(self._run(call))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, call: Callable[[], Awaitable[AuthOutcome]]) -> None:
        try:
            outcome = await call()
            next_state = self._state_for(outcome)
        except ClientError as e:
            next_state = Error(e.message)
        except Exception:
            logger.exception("%s submit failed unexpectedly", type(self).__name__)
            next_state = Error(self.fallback_message)

        if self._closed:
            logger.debug("%s closed, dropping %s", type(self).__name__, type(next_state).__name__)
            return
        self._state.set(next_state)

    def _state_for(self, outcome: AuthOutcome) -> ScreenState:
        match outcome:
            case Ok(session=session):
                return Success(session)
            case Failed(reason=reason):
                return Error(reason or self.fallback_message)
            case _:
                assert_never(outcome)


class LoginController(ScreenController):
    """State machine behind the login screen."""

    fallback_message = LOGIN_FAILED_FALLBACK

    def submit(self, email: str, password: str) -> Optional[asyncio.Task]:
        """
        Try to sign in.

        Returns:
            The task running the sign-in, or None if the submit was
            ignored (a call is already running) or failed validation
        """
        if not self._can_submit():
            return None

        if _is_blank(email) or _is_blank(password):
            self._reject("Email and password cannot be empty")
            return None

        return self._launch(lambda: self._repository.login(email, password))

    def check_login_status(
        self,
        on_logged_in: Callable[[], None],
        on_not_logged_in: Callable[[], None],
    ) -> asyncio.Task:
        """
        Look up whether a session is stored and call exactly one of the
        two continuations. The screen state is left alone.
        """
        async def check() -> None:
            logged_in = await self._repository.is_logged_in()
            if self._closed:
                return
            if logged_in:
                on_logged_in()
            else:
                on_not_logged_in()

        return asyncio.get_running_loop().create_task(check())


class RegisterController(ScreenController):
    """State machine behind the registration screen."""

    fallback_message = REGISTER_FAILED_FALLBACK

    @staticmethod
    def validate(name: str, email: str, password: str, confirm_password: str) -> Optional[str]:
        """Return the first validation error, or None if the input is acceptable."""
        if _is_blank(name):
            return "Name cannot be empty"
        if _is_blank(email):
            return "Email cannot be empty"
        if _is_blank(password):
            return "Password cannot be empty"
        if len(password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if password != confirm_password:
            return "Passwords do not match"
        return None

    def submit(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        phone_number: Optional[str] = None,
    ) -> Optional[asyncio.Task]:
        """
        Try to create an account.

        Returns:
            The task running the registration, or None if the submit was
            ignored or failed validation
        """
        if not self._can_submit():
            return None

        error = self.validate(name, email, password, confirm_password)
        if error is not None:
            self._reject(error)
            return None

        return self._launch(lambda: self._repository.register(name, email, password, phone_number))


__all__ = ['ScreenController', 'LoginController', 'RegisterController']
