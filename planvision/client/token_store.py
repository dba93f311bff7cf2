"""
Secure storage for the single bearer token.

The token lives in the platform keyring under a fixed service/account pair.
Keyring failures are logged and swallowed: saves and deletes become no-ops
and reads return None.
"""
import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)

SERVICE = "com.planvision.auth"
ACCOUNT = "authToken"


class TokenStore:
    """Keyring-backed token storage."""

    def __init__(self, service: str = SERVICE, account: str = ACCOUNT):
        self.service = service
        self.account = account

    def save(self, token: str) -> None:
        try:
            keyring.set_password(self.service, self.account, token)
        except KeyringError as e:
            logger.warning(f"Could not save token: {e}")

    def get_token(self) -> Optional[str]:
        try:
            return keyring.get_password(self.service, self.account)
        except KeyringError as e:
            logger.warning(f"Could not read token: {e}")
            return None

    def delete(self) -> None:
        try:
            keyring.delete_password(self.service, self.account)
        except PasswordDeleteError:
            # nothing stored
            pass
        except KeyringError as e:
            logger.warning(f"Could not delete token: {e}")


class MemoryTokenStore:
    """Process-local token storage with the same contract as TokenStore."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def save(self, token: str) -> None:
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def delete(self) -> None:
        self._token = None
