"""Per-browser credential storage in an encrypted cookie."""

import json
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import extra_streamlit_components as stx
from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)

COOKIE_NAME = "gemini_fitness_auth"


class SecureCredentialStorage:
    """Keeps the signed-in user's OAuth credentials in a Fernet-encrypted cookie.

    The cookie lives in the visitor's browser, so each browser restores only
    its own login.
    """

    def __init__(
        self,
        encryption_key: Optional[str] = None,
        cookie_name: str = COOKIE_NAME,
        expiry_days: int = 30,
        cookie_manager: Optional[Any] = None,
    ):
        """
        Initialize secure storage.

        Args:
            encryption_key: Fernet key; a temporary key is generated without it
            cookie_name: Name of the cookie holding the credentials
            expiry_days: Number of days until the cookie expires
            cookie_manager: Cookie manager to use instead of ``stx.CookieManager``
        """
        self.cookie_name = cookie_name
        self.expiry_days = expiry_days
        self._cookie_manager = cookie_manager

        if not encryption_key:
            # Cookies written with a temporary key stop decrypting after a restart.
            logger.warning("No cookie_encryption_key in secrets, using temporary key")
            encryption_key = Fernet.generate_key().decode()
        key = encryption_key.encode() if isinstance(encryption_key, str) else encryption_key
        self._cipher = Fernet(key)

    def _get_cookie_manager(self) -> stx.CookieManager:
        if self._cookie_manager is None:
            self._cookie_manager = stx.CookieManager()
        return self._cookie_manager

    def save_credentials(self, credentials: Dict[str, Any]) -> None:
        """
        Save credentials to the encrypted cookie.

        Args:
            credentials: Credentials dictionary to save
        """
        encrypted = self._cipher.encrypt(json.dumps(credentials).encode())
        self._get_cookie_manager().set(
            self.cookie_name,
            encrypted.decode(),
            expires_at=datetime.now() + timedelta(days=self.expiry_days),
            key=f"set-{self.cookie_name}",
        )
        logger.info("Credentials saved to encrypted cookie")

    def load_credentials(self) -> Optional[Dict[str, Any]]:
        """
        Load credentials from the encrypted cookie.

        Returns:
            Credentials dictionary if found and valid, None otherwise
        """
        encrypted = self._get_cookie_manager().get(self.cookie_name)
        if not encrypted:
            logger.debug("No credentials cookie found")
            return None

        try:
            credentials = json.loads(self._cipher.decrypt(encrypted.encode()).decode())
        except (InvalidToken, ValueError) as e:
            logger.warning(f"Failed to load credentials from cookie: {e}")
            return None

        if not isinstance(credentials, dict):
            return None
        logger.info("Credentials loaded from cookie")
        return credentials

    def clear_credentials(self) -> None:
        cookie_manager = self._get_cookie_manager()
        if cookie_manager.get(self.cookie_name) is None:
            return
        cookie_manager.delete(self.cookie_name, key=f"delete-{self.cookie_name}")
        logger.info("Credentials cookie cleared")
