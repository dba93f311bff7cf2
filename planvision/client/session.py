"""
Observable session state for the client application.
"""
import logging
from typing import Callable, List, Optional

from planvision.client.domain import AuthUser
from planvision.client.errors import NetworkError
from planvision.client.signals import UnauthorizedSignal

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[AuthUser]], None]


class SessionManager:
    """
    Holds the signed-in user and reacts to unauthorized responses.

    All mutation happens on the event loop that awaits these coroutines.
    ``is_loading`` starts True and becomes False once the first session check
    (or login) completes.
    """

    def __init__(self, auth_service, token_store, unauthorized: UnauthorizedSignal):
        self.auth_service = auth_service
        self.token_store = token_store
        self.is_loading = True
        self._current_user: Optional[AuthUser] = None
        self._listeners: List[Listener] = []
        self._disconnect = unauthorized.connect(self._handle_unauthorized)

    @property
    def current_user(self) -> Optional[AuthUser]:
        return self._current_user

    @current_user.setter
    def current_user(self, user: Optional[AuthUser]) -> None:
        self._current_user = user
        for listener in list(self._listeners):
            listener(user)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` on every change of ``current_user``. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def check_session(self) -> None:
        if self.token_store.get_token() is None:
            self.is_loading = False
            return

        try:
            self.current_user = await self.auth_service.fetch_session()
        except NetworkError as e:
            logger.info(f"Session check failed, logging out: {e}")
            await self.logout()
        finally:
            self.is_loading = False

    def login(self, user: AuthUser) -> None:
        self.current_user = user
        self.is_loading = False

    async def logout(self) -> None:
        try:
            await self.auth_service.sign_out()
        except NetworkError as e:
            logger.warning(f"⚠️  Remote sign-out failed: {e}")

        self.token_store.delete()
        self.current_user = None
        self.is_loading = False

    def close(self) -> None:
        """Stop listening for unauthorized responses."""
        self._disconnect()

    def _handle_unauthorized(self) -> None:
        logger.warning("⚠️ Session expired (401). Logging out locally.")
        self.current_user = None
        self.token_store.delete()
        self.is_loading = False
