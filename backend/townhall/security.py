"""
Townhall Backend — HTTP Basic Authentication
==============================================

What:  Gates write endpoints (POST, PUT, DELETE) behind a static set of
       HTTP Basic accounts. Read endpoints and /health are public.
How:   The accounts come from settings.auth_users and are parsed once at
       import into a read-only mapping held by CredentialStore. Routes add
       ``Depends(require_user)``; tests override ``get_credential_store``.

Policy:
    Placeholder security only. Passwords are configured and compared in
    clear text, there are no tokens and no sessions.
"""

import logging
import secrets
from types import MappingProxyType
from typing import Mapping, Optional

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from townhall.config import Settings, settings
from townhall.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header reaches require_user, which raises
# UnauthorizedError so the response uses the standard error body
basic_auth = HTTPBasic(auto_error=False, realm="townhall")


class CredentialStore:
    """Immutable username → password mapping."""

    def __init__(self, credentials: Mapping[str, str]):
        self._credentials = MappingProxyType(dict(credentials))

    @classmethod
    def from_settings(cls, config: Settings) -> "CredentialStore":
        return cls(config.credentials)

    @property
    def usernames(self):
        return frozenset(self._credentials)

    def verify(self, username: str, password: str) -> bool:
        expected = self._credentials.get(username)
        if expected is None:
            return False
        return secrets.compare_digest(expected.encode("utf-8"), password.encode("utf-8"))


# Loaded once at process start
credential_store = CredentialStore.from_settings(settings)


def get_credential_store() -> CredentialStore:
    return credential_store


async def require_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    store: CredentialStore = Depends(get_credential_store),
) -> str:
    """
    FastAPI dependency for protected routes.

    Returns:
        The authenticated username.

    Raises:
        UnauthorizedError: No Basic credentials, or a wrong name/password (→ 401)
    """
    if credentials is None:
        raise UnauthorizedError(message="Authentication required")
    if not store.verify(credentials.username, credentials.password):
        logger.warning("Rejected credentials for user '%s'", credentials.username)
        raise UnauthorizedError(message="Invalid username or password")
    return credentials.username
