"""
Explicit unauthorized broadcast shared by the HTTP layer and session state.
"""
import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class UnauthorizedSignal:
    """
    Raised whenever any backend call comes back 401.

    Receivers are plain callables run synchronously, in connection order, by
    ``emit``.
    """

    def __init__(self):
        self._receivers: List[Callable[[], None]] = []

    def connect(self, receiver: Callable[[], None]) -> Callable[[], None]:
        """Register a receiver. Returns a function that disconnects it."""
        self._receivers.append(receiver)

        def disconnect():
            if receiver in self._receivers:
                self._receivers.remove(receiver)

        return disconnect

    def emit(self) -> None:
        logger.info(f"Broadcasting unauthorized to {len(self._receivers)} receiver(s)")
        for receiver in list(self._receivers):
            receiver()
