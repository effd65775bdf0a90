"""
Composition of several subconnectors behind one connector.

The composed connector shares one configuration among its subconnectors and
adds a "Data Type" select parameter; get_schema/get_data route each request
to the subconnector the user picked.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..core.connector import Connector
from ..core.exceptions import CompositionError, ConnectorError, DispatchError
from ..core.models import (
    ConfigOption, ConfigParam, ConfigParamType, ConnectorConfig, ConnectorRequest,
    DataResult, SchemaField,
)


logger = logging.getLogger(__name__)


DISPATCH_KEY = "combineConnectors__connectorSelection"

SharedConfig = Union[
    ConnectorConfig,
    List[ConfigParam],
    Callable[[ConnectorRequest], Union[ConnectorConfig, List[ConfigParam]]],
]
ConfigValidator = Callable[[Dict[str, Any]], None]


def make_get_config(config: SharedConfig) -> Callable[[ConnectorRequest], ConnectorConfig]:
    """
    Normalize a config source into a get_config callable.

    A static ConnectorConfig is returned as-is on every call; a bare list of
    parameters becomes ``ConnectorConfig(params, date_range_required=False)``.
    """
    if callable(config):
        return lambda request: ConnectorConfig.normalize(config(request))

    normalized = ConnectorConfig.normalize(config)
    return lambda request: normalized


def validate_subconnector(subconnector: Any) -> None:
    """
    Check that an object can be composed.

    It needs callable get_schema and get_data and a non-empty string label,
    and must not define get_config (configuration belongs to the composer).

    Raises:
        CompositionError: Describing the first problem found
    """
    if subconnector is None:
        raise CompositionError("subconnector is missing")

    if not callable(getattr(subconnector, "get_data", None)):
        raise CompositionError("subconnector requires get_data()")

    if not callable(getattr(subconnector, "get_schema", None)):
        raise CompositionError("subconnector requires get_schema()")

    label = getattr(subconnector, "label", None)
    if not isinstance(label, str) or not label:
        raise CompositionError("subconnector requires a label")

    if callable(getattr(subconnector, "get_config", None)):
        raise CompositionError(
            "subconnector should NOT have get_config(); this is handled by the composer"
        )


class ComposedConnector(Connector):
    """
    Connector routing requests to one of several subconnectors.

    Requests pass through three stages: config validation (the optional
    ``validate_config`` hook), dispatch resolution (the DISPATCH_KEY param
    must name a known subconnector) and delegation (the unmodified request is
    handed to the subconnector's own method).
    """

    def __init__(
        self,
        shared_config: SharedConfig,
        subconnectors: Mapping[str, Any],
        validate_config: Optional[ConfigValidator] = None,
    ):
        """
        Initialize the composed connector.

        Args:
            shared_config: Config shared by all subconnectors (static config,
                list of params, or callable)
            subconnectors: Key -> subconnector
            validate_config: Optional callable receiving the request's config
                params; raises ConnectorError on invalid input

        Raises:
            CompositionError: If a subconnector is malformed or none are given
        """
        if not subconnectors:
            raise CompositionError("At least one subconnector is required")

        for key, subconnector in subconnectors.items():
            try:
                validate_subconnector(subconnector)
            except CompositionError as e:
                raise CompositionError(f"problem with subconnector {key}: {e.message}") from e

        self.subconnectors = dict(subconnectors)
        self.validate_config = validate_config
        self._get_shared_config = make_get_config(shared_config)
        self.selector_param = ConfigParam(
            name=DISPATCH_KEY,
            display_name="Data Type",
            help_text="Select the type of data you want.",
            type=ConfigParamType.SELECT_SINGLE,
            options=[
                ConfigOption(value=key, label=self.subconnectors[key].label)
                for key in sorted(self.subconnectors)
            ],
        )
        logger.debug(f"Composed connector over: {', '.join(sorted(self.subconnectors))}")

    def get_config(self, request: Optional[ConnectorRequest] = None) -> ConnectorConfig:
        """Return the shared config with the Data Type selector appended."""
        shared = self._get_shared_config(request)
        return ConnectorConfig(
            config_params=list(shared.config_params) + [self.selector_param],
            date_range_required=shared.date_range_required,
        )

    def get_schema(self, request: ConnectorRequest) -> Dict[str, List[SchemaField]]:
        """Validate, then delegate to the selected subconnector's get_schema."""
        return self.resolve(request).get_schema(request)

    def get_data(self, request: ConnectorRequest) -> DataResult:
        """Validate, then delegate to the selected subconnector's get_data."""
        return self.resolve(request).get_data(request)

    def resolve(self, request: ConnectorRequest) -> Any:
        """
        Run config validation and dispatch resolution for a request.

        Returns:
            The selected subconnector

        Raises:
            ConnectorError: From validate_config, marked user-facing
            DispatchError: If the selection is missing or unknown
        """
        config_params = request.config_params or {}

        if self.validate_config is not None:
            try:
                self.validate_config(config_params)
            except ConnectorError as e:
                e.user_facing = True
                raise

        selection = config_params.get(DISPATCH_KEY)
        subconnector = self.subconnectors.get(selection) if isinstance(selection, str) else None
        if subconnector is None:
            raise DispatchError(f"Invalid Connector selected: {selection}")

        logger.debug(f"Dispatching to subconnector {selection!r}", extra={"connector": selection})
        return subconnector


def compose_connectors(
    shared_config: SharedConfig,
    subconnectors: Mapping[str, Any],
    validate_config: Optional[ConfigValidator] = None,
) -> ComposedConnector:
    """
    Combine subconnectors into a single connector.

    Example:
        >>> connector = compose_connectors(
        ...     shared_config=[ConfigParam(name="organization", display_name="Organization")],
        ...     subconnectors={"issues": issues_connector, "stars": stars_connector},
        ... )
    """
    return ComposedConnector(shared_config, subconnectors, validate_config)
