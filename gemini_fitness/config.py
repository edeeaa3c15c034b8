"""Application settings read from Streamlit secrets."""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from gemini_fitness.exceptions import ConfigurationError

DEFAULT_REDIRECT_URI = "http://localhost:8501"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_SNAPSHOT_DIR = "~/.gemini_fitness"


class AppSettings(BaseModel):
    """Settings for OAuth, Gemini, the credentials cookie and the local snapshot."""

    client_id: str = Field(..., description="Google OAuth client ID")
    client_secret: str = Field(..., description="Google OAuth client secret")
    redirect_uri: str = Field(default=DEFAULT_REDIRECT_URI)
    gemini_api_key: str = Field(..., description="Google Gemini API key")
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL)
    snapshot_dir: str = Field(default=DEFAULT_SNAPSHOT_DIR)
    snapshot_encryption_key: Optional[str] = Field(
        default=None, description="Fernet key for the local snapshot"
    )
    cookie_encryption_key: Optional[str] = Field(
        default=None, description="Fernet key for the credentials cookie"
    )

    @classmethod
    def from_secrets(cls, secrets: Mapping[str, Any]) -> "AppSettings":
        """
        Build settings from ``st.secrets`` or any mapping with the same layout.

        Expected keys: ``google_oauth.client_id``, ``google_oauth.client_secret``
        and ``GEMINI_API_KEY``; ``redirect_uri``, ``gemini_model``,
        ``snapshot_dir``, ``snapshot_encryption_key`` and
        ``cookie_encryption_key`` are optional.
        """
        oauth = secrets.get("google_oauth") or {}
        missing = [
            name
            for name, value in (
                ("google_oauth.client_id", oauth.get("client_id")),
                ("google_oauth.client_secret", oauth.get("client_secret")),
                ("GEMINI_API_KEY", secrets.get("GEMINI_API_KEY")),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing secrets: {', '.join(missing)}")

        return cls(
            client_id=oauth["client_id"],
            client_secret=oauth["client_secret"],
            redirect_uri=secrets.get("redirect_uri") or DEFAULT_REDIRECT_URI,
            gemini_api_key=secrets["GEMINI_API_KEY"],
            gemini_model=secrets.get("gemini_model") or DEFAULT_GEMINI_MODEL,
            snapshot_dir=secrets.get("snapshot_dir") or DEFAULT_SNAPSHOT_DIR,
            snapshot_encryption_key=secrets.get("snapshot_encryption_key"),
            cookie_encryption_key=secrets.get("cookie_encryption_key"),
        )

    def client_config(self) -> Dict[str, Any]:
        """Google OAuth client configuration dict."""
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
            }
        }
