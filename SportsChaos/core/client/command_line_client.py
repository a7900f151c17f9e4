import asyncio
import getpass
import logging
from typing import Callable, List, Optional

from SportsChaos.api.client import AuthGateway, GatewayTimeouts
from SportsChaos.core.client.auth.controllers import LoginController, RegisterController
from SportsChaos.core.client.auth.models import Failed, Ok
from SportsChaos.core.client.auth.repository import SessionRepository
from SportsChaos.core.client.auth.state import ScreenState, Success, describe
from SportsChaos.core.client.services.credential_store import CredentialStore
from .client_base import Client

logger = logging.getLogger(__name__)


class StandardCommandlineClient(Client):
    """
    Text front end for the session core.

    Owns the composition root: one gateway, one credential store and one
    repository shared by the login and register controllers.
    """

    def __init__(
        self,
        base_url: str,
        store_path: str,
        timeouts: Optional[GatewayTimeouts] = None,
        prompt: Callable[[str], str] = input,
        secret_prompt: Callable[[str], str] = getpass.getpass,
        output: Callable[[str], None] = print,
    ):
        super().__init__(base_url)
        self.store_path = store_path
        self.timeouts = timeouts
        self._prompt = prompt
        self._secret_prompt = secret_prompt
        self._output = output

        self.gateway: Optional[AuthGateway] = None
        self.store: Optional[CredentialStore] = None
        self.repository: Optional[SessionRepository] = None
        self.login_controller: Optional[LoginController] = None
        self.register_controller: Optional[RegisterController] = None
        self._unsubscribers: List[Callable[[], None]] = []

    async def __aenter__(self) -> 'StandardCommandlineClient':
        self.gateway = AuthGateway(self.base_url, self.timeouts)
        self.store = CredentialStore(self.store_path)
        await self.store.load()
        self.repository = SessionRepository(self.gateway, self.store)
        self.login_controller = LoginController(self.repository)
        self.register_controller = RegisterController(self.repository)
        for controller in (self.login_controller, self.register_controller):
            self._unsubscribers.append(controller.state.subscribe(self._render))
        logger.debug("Client wired to %s with session file %s", self.base_url, self.store.path)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        for controller in (self.login_controller, self.register_controller):
            if controller is not None:
                controller.close()
        if self.gateway is not None:
            await self.gateway.close()

    def _render(self, state: ScreenState) -> None:
        text = describe(state)
        if text:
            self._output(text)

    async def _ask(self, label: str, secret: bool = False) -> str:
        # input() blocks, so it runs in an executor to keep the loop free
        reader = self._secret_prompt if secret else self._prompt
        return await asyncio.get_running_loop().run_in_executor(None, reader, label)

    async def run(self) -> None:
        """Interactive loop: restore the session, then auth menu or home."""
        logged_in = asyncio.Event()

        await self.login_controller.check_login_status(logged_in.set, lambda: None)

        while True:
            if logged_in.is_set():
                if not await self._home():
                    return
                logged_in.clear()
            else:
                result = await self._auth_menu()
                if result is None:
                    return
                if result:
                    logged_in.set()

    async def _auth_menu(self) -> Optional[bool]:
        """
        Returns:
            True once signed in, False to show the menu again, None to quit
        """
        self._output("")
        self._output("Please select options:")
        self._output("1. Login")
        self._output("2. Register")
        self._output("Q. Quit")
        choice = (await self._ask("Please enter your choice (1/2/Q): ")).strip()

        match choice:
            case "1":
                return await self.login()
            case "2":
                return await self.register()
            case "q" | "Q":
                self._output("Bye!")
                return None
            case _:
                self._output("Invalid option, please choose again")
                return False

    async def _home(self) -> bool:
        """
        Returns:
            False to quit, True after logging out
        """
        user = await self.repository.current_user()
        if user is not None:
            self._output("")
            self._output(f"Signed in as {user.name} <{user.email}> ({user.role})")

        while True:
            command = (await self._ask("home> ")).strip().lower()
            match command.split():
                case ["status"]:
                    await self.status()
                case ["logout"]:
                    await self.logout()
                    return True
                case ["exit"] | ["quit"] | ["q"]:
                    self._output("Bye!")
                    return False
                case ["help"]:
                    self._output("Commands:")
                    self._output("  status - Check the session with the server")
                    self._output("  logout - Sign out")
                    self._output("  exit - Exit the client")
                case []:
                    continue
                case _:
                    self._output(f"Unknown command: {command}, try type command 'help' to check commands")

    async def login(self, email: Optional[str] = None, password: Optional[str] = None) -> bool:
        """Run the login screen once. Returns True when signed in."""
        if email is None:
            email = (await self._ask("Email: ")).strip()
        if password is None:
            password = await self._ask("Password: ", secret=True)

        task = self.login_controller.submit(email, password)
        if task is not None:
            await task
        return self._finish(self.login_controller)

    async def register(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        password: Optional[str] = None,
        confirm_password: Optional[str] = None,
    ) -> bool:
        """Run the registration screen once. Returns True when signed in."""
        if name is None:
            name = (await self._ask("Name: ")).strip()
        if email is None:
            email = (await self._ask("Email: ")).strip()
        if phone_number is None:
            phone_number = (await self._ask("Phone number (optional): ")).strip()
        if password is None:
            password = await self._ask("Password: ", secret=True)
        if confirm_password is None:
            confirm_password = await self._ask("Confirm password: ", secret=True)
        phone_number = phone_number or None

        task = self.register_controller.submit(name, email, password, confirm_password, phone_number)
        if task is not None:
            await task
        return self._finish(self.register_controller)

    @staticmethod
    def _finish(controller) -> bool:
        succeeded = isinstance(controller.state.value, Success)
        # Error banners are dismissed once shown; a success stays until the next screen
        if not succeeded:
            controller.reset()
        return succeeded

    async def status(self) -> bool:
        """Print whether a session is stored and whether the server accepts it."""
        if not await self.repository.is_logged_in():
            self._output("Not logged in")
            return False

        match await self.repository.validate_session():
            case Ok(session=session):
                self._output(f"Logged in as {session.name} <{session.email}>")
                return True
            case Failed(reason=reason):
                self._output(f"Stored session was rejected: {reason}")
                return False

    async def logout(self) -> None:
        await self.repository.logout()
        self.login_controller.reset()
        self.register_controller.reset()
        self._output("Logged out")
