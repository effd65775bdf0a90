"""
Unit tests for connector composition and dispatch.
"""

import pytest

from datalink.compose import DISPATCH_KEY, compose_connectors, make_get_config
from datalink.core.exceptions import CompositionError, ConfigError, DispatchError
from datalink.core.models import (
    ConfigParam, ConfigParamType, ConnectorConfig, DataResult, Row,
)


class RecordingSubconnector:
    """Subconnector stub recording the requests it receives."""

    def __init__(self, label):
        self.label = label
        self.schema_requests = []
        self.data_requests = []

    def get_schema(self, request):
        self.schema_requests.append(request)
        return {"schema": []}

    def get_data(self, request):
        self.data_requests.append(request)
        return DataResult(schema=[], rows=[Row(values=[self.label])])


SHARED_PARAMS = [
    ConfigParam(name="organization", display_name="Organization"),
    ConfigParam(name="repository", display_name="Repository"),
]


@pytest.fixture
def subconnectors():
    return {
        "stars": RecordingSubconnector("Stars"),
        "issues": RecordingSubconnector("Issues"),
    }


class TestComposition:
    """Tests for composition-time validation."""

    def test_missing_get_data(self):
        class NoData:
            label = "x"

            def get_schema(self, request):
                return {"schema": []}

        with pytest.raises(CompositionError, match="broken"):
            compose_connectors(SHARED_PARAMS, {"broken": NoData()})

    def test_missing_label(self):
        sub = RecordingSubconnector("")

        with pytest.raises(CompositionError, match="label"):
            compose_connectors(SHARED_PARAMS, {"nolabel": sub})

    def test_own_get_config_rejected(self):
        """Test subconnectors must not define get_config."""
        sub = RecordingSubconnector("Configured")
        sub.get_config = lambda request: ConnectorConfig()

        with pytest.raises(CompositionError, match="configured"):
            compose_connectors(SHARED_PARAMS, {"configured": sub})

    def test_no_subconnectors(self):
        with pytest.raises(CompositionError):
            compose_connectors(SHARED_PARAMS, {})


class TestGetConfig:
    """Tests for the composed configuration."""

    def test_selector_appended(self, subconnectors):
        """Test one selector param is appended, with one option per subconnector."""
        connector = compose_connectors(SHARED_PARAMS, subconnectors)

        config = connector.get_config()

        assert len(config.config_params) == len(SHARED_PARAMS) + 1
        selector = config.config_params[-1]
        assert selector.name == DISPATCH_KEY
        assert selector.type == ConfigParamType.SELECT_SINGLE
        assert selector.display_name == "Data Type"
        assert len(selector.options) == len(subconnectors)

    def test_options_sorted_by_key(self, subconnectors):
        connector = compose_connectors(SHARED_PARAMS, subconnectors)

        options = connector.get_config().config_params[-1].options

        assert [(o.value, o.label) for o in options] == [("issues", "Issues"), ("stars", "Stars")]

    def test_date_range_flag_preserved(self, subconnectors):
        """Test a callable shared config keeps its date range flag."""
        shared = lambda request: ConnectorConfig(list(SHARED_PARAMS), date_range_required=True)

        config = compose_connectors(shared, subconnectors).get_config()

        assert config.date_range_required is True
        assert len(config.config_params) == 3

    def test_shared_config_not_mutated(self, subconnectors):
        static = ConnectorConfig(list(SHARED_PARAMS))
        connector = compose_connectors(static, subconnectors)

        connector.get_config()
        connector.get_config()

        assert len(static.config_params) == 2

    def test_host_shape(self, subconnectors):
        config = compose_connectors(SHARED_PARAMS, subconnectors).get_config().to_dict()

        assert config["dateRangeRequired"] is False
        assert config["configParams"][-1]["options"][0] == {"value": "issues", "label": "Issues"}


class TestMakeGetConfig:
    """Tests for config normalization."""

    def test_list_becomes_config(self):
        config = make_get_config(SHARED_PARAMS)(None)

        assert config.config_params == SHARED_PARAMS
        assert config.date_range_required is False

    def test_static_config_returned_as_is(self):
        static = ConnectorConfig(SHARED_PARAMS, date_range_required=True)

        assert make_get_config(static)(None) is static


class TestDispatch:
    """Tests for get_schema/get_data routing."""

    def test_routes_to_selected(self, subconnectors, make_request):
        """Test the request is delegated unmodified to the selected subconnector."""
        connector = compose_connectors(SHARED_PARAMS, subconnectors)
        request = make_request({DISPATCH_KEY: "stars"}, fields=["stars"])

        result = connector.get_data(request)

        assert result.rows[0].values == ["Stars"]
        assert subconnectors["stars"].data_requests == [request]
        assert subconnectors["stars"].data_requests[0] is request
        assert subconnectors["issues"].data_requests == []

    def test_schema_routes_too(self, subconnectors, make_request):
        connector = compose_connectors(SHARED_PARAMS, subconnectors)

        connector.get_schema(make_request({DISPATCH_KEY: "issues"}))

        assert len(subconnectors["issues"].schema_requests) == 1
        assert subconnectors["stars"].schema_requests == []

    def test_unknown_selection(self, subconnectors, make_request):
        """Test an unknown key fails user-facing without touching subconnectors."""
        connector = compose_connectors(SHARED_PARAMS, subconnectors)

        with pytest.raises(DispatchError) as exc_info:
            connector.get_data(make_request({DISPATCH_KEY: "forks"}))

        assert exc_info.value.user_facing
        assert exc_info.value.host_message() == "DS_USER:Invalid Connector selected: forks"
        for sub in subconnectors.values():
            assert sub.data_requests == []

    def test_missing_selection(self, subconnectors, make_request):
        connector = compose_connectors(SHARED_PARAMS, subconnectors)

        with pytest.raises(DispatchError):
            connector.get_schema(make_request({}))

    def test_validation_runs_first(self, subconnectors, make_request):
        """Test validate_config errors surface before dispatch, as user-facing."""

        def validate(params):
            if not params.get("organization"):
                raise ConfigError("You must provide an Organization.", user_facing=False)

        connector = compose_connectors(SHARED_PARAMS, subconnectors, validate_config=validate)

        with pytest.raises(ConfigError) as exc_info:
            connector.get_data(make_request({DISPATCH_KEY: "nope"}))

        assert exc_info.value.user_facing
        assert exc_info.value.host_message() == "DS_USER:You must provide an Organization."
        assert subconnectors["stars"].data_requests == []

    def test_validation_receives_params(self, subconnectors, make_request):
        seen = []
        connector = compose_connectors(
            SHARED_PARAMS, subconnectors, validate_config=seen.append,
        )

        connector.get_data(make_request({DISPATCH_KEY: "stars", "organization": "google"}))

        assert seen == [{DISPATCH_KEY: "stars", "organization": "google"}]
