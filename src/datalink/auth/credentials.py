"""
Credential providers supplying upstream access tokens.

Acquiring a token (e.g. an interactive OAuth handshake) happens outside this
package; providers only hand out a token that is already available.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional


logger = logging.getLogger(__name__)


class CredentialProvider(ABC):
    """Abstract source of upstream access tokens."""

    @abstractmethod
    def get_access_token(self) -> Optional[str]:
        """Return the current access token, or None when unauthenticated."""
        pass

    def has_access(self) -> bool:
        return bool(self.get_access_token())


class StaticCredentialProvider(CredentialProvider):
    """Provider holding a fixed token."""

    def __init__(self, token: Optional[str] = None):
        self.token = token

    def get_access_token(self) -> Optional[str]:
        return self.token


class EnvironmentCredentialProvider(CredentialProvider):
    """
    Provider reading the token from an environment variable.

    The variable is read on every call, so rotating the token in the
    environment takes effect without rebuilding the provider.
    """

    def __init__(self, variable: str = "GITHUB_TOKEN"):
        self.variable = variable

    def get_access_token(self) -> Optional[str]:
        token = os.environ.get(self.variable)
        if not token:
            logger.debug(f"No access token in ${self.variable}")
            return None
        return token
