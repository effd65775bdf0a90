"""
datalink - a framework for building analytics data connectors.

A connector exposes an external data source's records to an analytics host
through a declared column schema. Key components:
- core/: data model, exceptions, connector and upstream interfaces, logging
- schema/: keyed/unkeyed schema views with config-dependent caching
- transform/: raw record to host row transformation
- pagination/: sequential multi-page fetch driver
- compose/: multi-connector composition and dispatch
- connectors/: definition-driven connectors and the GitHub connector
- clients/: upstream HTTP client and a deterministic test client
- auth/: credential providers and the memoized client handle
- config/: YAML settings with environment overrides
"""

__version__ = "0.1.0"
