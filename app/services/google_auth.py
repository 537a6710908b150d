# app/services/google_auth.py
from dataclasses import dataclass
from typing import Optional

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from app.core.config import GOOGLE_CLIENT_IDS, GOOGLE_VERIFY_TIMEOUT


class IdentityVerificationError(Exception):
    """The identity token was rejected (signature, expiry, audience, issuer)."""


class IdentityProviderUnavailable(Exception):
    """The provider could not be reached within the deadline."""


@dataclass(frozen=True)
class ThirdPartyProfile:
    subject: Optional[str]
    email: Optional[str]
    display_name: Optional[str]
    image_url: Optional[str]


class _DeadlineRequest(google_requests.Request):
    """requests transport that applies a fixed timeout to every certificate fetch."""

    def __init__(self, timeout: float, session=None):
        super().__init__(session=session)
        self.timeout = timeout

    def __call__(self, url, method="GET", body=None, headers=None, timeout=None, **kwargs):
        return super().__call__(
            url, method=method, body=body, headers=headers,
            timeout=timeout or self.timeout, **kwargs
        )


class GoogleIdentityVerifier:
    def __init__(self, client_ids, timeout: float = GOOGLE_VERIFY_TIMEOUT):
        self.client_ids = list(client_ids)
        self.timeout = timeout

    def verify(self, token: str) -> ThirdPartyProfile:
        """Validate a Google ID token against the accepted client ids and
        return the normalized profile it carries."""
        if not self.client_ids:
            raise IdentityVerificationError("No accepted client ids configured")
        try:
            payload = id_token.verify_oauth2_token(
                token, _DeadlineRequest(self.timeout), audience=self.client_ids
            )
        except google_exceptions.TransportError as exc:
            raise IdentityProviderUnavailable(str(exc)) from exc
        except (ValueError, google_exceptions.GoogleAuthError) as exc:
            raise IdentityVerificationError(str(exc)) from exc

        email = payload.get("email")
        return ThirdPartyProfile(
            subject=payload.get("sub"),
            email=email,
            display_name=payload.get("name") or (email.split("@")[0] if email else None),
            image_url=payload.get("picture"),
        )


def get_identity_verifier() -> GoogleIdentityVerifier:
    return GoogleIdentityVerifier(GOOGLE_CLIENT_IDS, timeout=GOOGLE_VERIFY_TIMEOUT)
