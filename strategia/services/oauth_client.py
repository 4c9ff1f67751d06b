import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from strategia.core.config import settings
from strategia.core.exceptions import OAuthException
from strategia.core.security import TokenUtils

logger = logging.getLogger(__name__)

GOOGLE_PROVIDER = "google"


class GoogleOAuthClient:
    """Intercambio de código OAuth con Google vía httpx."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None) -> None:
        self.transport = transport

    def authorize_url(self) -> str:
        params = {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "redirect_uri": settings.OAUTH_REDIRECT_URL,
            "response_type": "code",
            "scope": "openid email profile",
            "prompt": "consent",
            "access_type": "offline",
            "state": TokenUtils.create_oauth_state(GOOGLE_PROVIDER),
        }
        return f"{settings.GOOGLE_AUTHORIZE_URL}?{urlencode(params)}"

    def fetch_user_info(self, code: str) -> Dict[str, Any]:
        """Canjea ``code`` por un access token y devuelve el perfil del proveedor."""
        try:
            with httpx.Client(
                transport=self.transport, timeout=settings.OAUTH_TIMEOUT_SECONDS
            ) as client:
                token_response = client.post(
                    settings.GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": settings.GOOGLE_CLIENT_ID,
                        "client_secret": settings.GOOGLE_CLIENT_SECRET,
                        "redirect_uri": settings.OAUTH_REDIRECT_URL,
                        "grant_type": "authorization_code",
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise OAuthException("OAuth provider returned no access token")

                info_response = client.get(
                    settings.GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                info_response.raise_for_status()
                user_info = info_response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception("OAuth exchange with %s failed", GOOGLE_PROVIDER)
            raise OAuthException("Error signing in with Google") from exc

        if not user_info.get("email"):
            raise OAuthException("OAuth provider returned no email")
        return user_info
