"""
Credential providers and the shared client handle.
"""

from .credentials import (
    CredentialProvider,
    EnvironmentCredentialProvider,
    StaticCredentialProvider,
)
from .handle import ClientHandle

__all__ = [
    "CredentialProvider",
    "EnvironmentCredentialProvider",
    "StaticCredentialProvider",
    "ClientHandle",
]
