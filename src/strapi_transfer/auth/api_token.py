"""Bearer token authentication for the Strapi admin API."""


class APITokenAuth:
    """Adds an ``Authorization: Bearer <token>`` header to requests.

    Admin JWTs copied out of browser storage are often wrapped in quotes;
    those are stripped.
    """

    def __init__(self, token: str) -> None:
        self._token = (token or "").strip().strip('"')

    def validate_token(self) -> bool:
        """Return True if a non-empty token is present."""
        return bool(self._token)

    def get_headers(self) -> dict[str, str]:
        """Return the authentication headers."""
        return {"Authorization": f"Bearer {self._token}"}
