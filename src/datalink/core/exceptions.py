"""
Custom exceptions for the datalink connector framework.

Errors meant for end users of the analytics host carry the ``user_facing``
flag. The host recognises them by the ``DS_USER:`` prefix produced by
``host_message()``; every other error is shown to connector developers only.
"""

from typing import Any, Optional


USER_ERROR_PREFIX = "DS_USER:"


class ConnectorError(Exception):
    """Base exception for all connector framework errors."""

    user_facing = False

    def __init__(self, message: str, user_facing: Optional[bool] = None):
        super().__init__(message)
        self.message = message
        if user_facing is not None:
            self.user_facing = user_facing

    def host_message(self) -> str:
        """Render the error the way the analytics host expects it."""
        if self.user_facing:
            return f"{USER_ERROR_PREFIX}{self.message}"
        return self.message


class ConfigError(ConnectorError):
    """
    Missing or invalid connector configuration.

    Raised when:
    - A required configuration parameter is not set
    - A configuration value is out of its valid range
    - A connector definition lacks a required setting (e.g. base URL)
    """

    user_facing = True


class SchemaError(ConnectorError):
    """
    Malformed schema source.

    Raised when:
    - Two schema fields share a name
    - A keyed schema entry names a different field than its key
    - A field declares an unknown data type or concept type
    """
    pass


class FetchError(ConnectorError):
    """
    Error talking to the upstream source.

    Raised when:
    - The upstream host is unreachable or the request times out
    - The upstream answers with a non-2xx status
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        user_facing: Optional[bool] = None,
    ):
        super().__init__(message, user_facing=user_facing)
        self.status_code = status_code
        self.url = url


class ParseError(ConnectorError):
    """
    Upstream payload could not be decoded.

    Raised when:
    - A response body is not valid JSON
    - A decoded page does not have the expected shape
    """
    pass


class MissingFieldError(ConnectorError):
    """
    A requested field could not be resolved.

    Raised when:
    - A record has no value for the field and no default is configured
    - The field is not declared in the connector schema
    """

    def __init__(
        self,
        message: str,
        field_name: str,
        record: Any = None,
        key: Any = None,
    ):
        super().__init__(message)
        self.field_name = field_name
        self.record = record
        self.key = key


class DispatchError(ConnectorError):
    """Unknown or missing subconnector selection in a composed connector."""

    user_facing = True


class CompositionError(ConnectorError):
    """
    Malformed subconnector handed to the composer.

    Raised when:
    - A subconnector lacks get_schema/get_data or a label
    - A subconnector defines its own get_config
    - No subconnectors were given
    """
    pass
