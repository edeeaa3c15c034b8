"""Google OAuth helpers for the Streamlit app."""

import logging
from datetime import datetime
from typing import Any, Dict

import requests
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from gemini_fitness.config import AppSettings

logger = logging.getLogger(__name__)

# drive.file limits access to the folder and sheets this app creates
SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/drive.file",
]

USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
REVOKE_URL = "https://oauth2.googleapis.com/revoke"


def _flow(settings: AppSettings) -> Flow:
    return Flow.from_client_config(
        client_config=settings.client_config(),
        scopes=SCOPES,
        redirect_uri=settings.redirect_uri,
    )


def get_authorization_url(settings: AppSettings) -> str:
    authorization_url, _ = _flow(settings).authorization_url(
        access_type="offline",
        include_granted_scopes="true",
        prompt="consent",
    )
    return authorization_url


def exchange_code_for_token(code: str, settings: AppSettings) -> Credentials:
    """
    Exchange the authorization code from the OAuth callback for credentials.

    Args:
        code: Authorization code from the redirect query string
        settings: App settings with the OAuth client

    Returns:
        Google OAuth2 Credentials object
    """
    flow = _flow(settings)
    flow.fetch_token(code=code)
    return flow.credentials


def refresh_credentials(credentials: Credentials) -> Credentials:
    """
    Refresh expired credentials when a refresh token is available.

    Args:
        credentials: Google OAuth2 credentials

    Returns:
        The same credentials, refreshed if they had expired
    """
    if credentials.expired and credentials.refresh_token:
        credentials.refresh(Request())
    return credentials


def credentials_to_dict(credentials: Credentials) -> Dict[str, Any]:
    """
    Convert credentials to a JSON-safe dictionary for cookie storage.

    Args:
        credentials: Google OAuth2 credentials

    Returns:
        Dictionary with token, refresh token, client and ISO expiry
    """
    return {
        "token": credentials.token,
        "refresh_token": credentials.refresh_token,
        "token_uri": credentials.token_uri,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "scopes": credentials.scopes,
        "expiry": credentials.expiry.isoformat() if credentials.expiry else None,
    }


def credentials_from_dict(data: Dict[str, Any]) -> Credentials:
    """
    Rebuild credentials from a dictionary made by ``credentials_to_dict``.

    Args:
        data: Credentials dictionary

    Returns:
        Google OAuth2 Credentials object
    """
    expiry = datetime.fromisoformat(data["expiry"]) if data.get("expiry") else None
    return Credentials(
        token=data["token"],
        refresh_token=data.get("refresh_token"),
        token_uri=data.get("token_uri"),
        client_id=data.get("client_id"),
        client_secret=data.get("client_secret"),
        scopes=data.get("scopes"),
        expiry=expiry,
    )


def get_user_info(credentials: Credentials) -> Dict[str, Any]:
    """
    Fetch the signed-in user's email and profile.

    Args:
        credentials: Valid Google OAuth2 credentials

    Returns:
        Dictionary with user information
    """
    credentials = refresh_credentials(credentials)
    response = requests.get(
        USERINFO_URL,
        headers={"Authorization": f"Bearer {credentials.token}"},
        timeout=10,
    )
    response.raise_for_status()
    return response.json()


def revoke_credentials(credentials: Credentials) -> None:
    """
    Revoke the access token with Google. Failures are logged, not raised.

    Args:
        credentials: Credentials to revoke
    """
    try:
        requests.post(
            REVOKE_URL,
            params={"token": credentials.token},
            headers={"content-type": "application/x-www-form-urlencoded"},
            timeout=10,
        )
        logger.info("Credentials revoked successfully")
    except requests.RequestException as e:
        logger.warning(f"Failed to revoke credentials: {e}")
