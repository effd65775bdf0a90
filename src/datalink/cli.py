#!/usr/bin/env python3
"""
CLI entry point for running the GitHub connector outside the analytics host.

Prints the host JSON shapes on stdout; logs go to stderr.

Usage:
    datalink config
    datalink schema --organization google --repository datastudio --data-type issues
    datalink data --organization google --repository datastudio --data-type stars --sample
    datalink data ... --fields title,open --config config/datalink.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .auth import ClientHandle, EnvironmentCredentialProvider
from .clients import HttpUpstreamClient
from .compose import DISPATCH_KEY
from .config import ConnectorSettings
from .connectors.github import build_github_connector
from .core.connector import ConnectorInterface
from .core.exceptions import ConnectorError
from .core.logging import configure_logging


logger = logging.getLogger(__name__)


def setup_logging(settings: ConnectorSettings, verbose: bool = False, json_logs: bool = False) -> None:
    """Configure logging from settings and flags."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = str(settings.get("logging.level", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)

    structured = json_logs or bool(settings.get("logging.structured", False))
    configure_logging(level=level, structured=structured)


def build_client_handle(settings: ConnectorSettings) -> ClientHandle:
    """Create the lazily-initialized upstream client handle."""
    http_config = settings.get_http_config()
    return ClientHandle(lambda: HttpUpstreamClient(
        name="github",
        rate_limit_delay=http_config.get("rate_limit_delay", 0.0),
        timeout=http_config.get("timeout", 30),
        max_retries=http_config.get("max_retries", 3),
        user_agent=http_config.get("user_agent"),
    ))


def build_host_request(args: argparse.Namespace, fields: Optional[List[str]] = None) -> Dict[str, Any]:
    """Build the request dict the analytics host would send."""
    config_params = {}
    if args.organization:
        config_params["organization"] = args.organization
    if args.repository:
        config_params["repository"] = args.repository
    if args.data_type:
        config_params[DISPATCH_KEY] = args.data_type

    request: Dict[str, Any] = {
        "configParams": config_params,
        "fields": [{"name": name} for name in fields or []],
    }
    if args.sample:
        request["scriptParams"] = {"sampleExtraction": True}
    return request


def run(args: argparse.Namespace, interface: ConnectorInterface) -> Dict[str, Any]:
    """Execute one command against the connector interface."""
    if args.command == "config":
        return interface.get_config(build_host_request(args))

    if args.command == "schema":
        return interface.get_schema(build_host_request(args))

    fields = [name.strip() for name in args.fields.split(",") if name.strip()] if args.fields else []
    if not fields:
        schema = interface.get_schema(build_host_request(args))["schema"]
        fields = [f["name"] for f in schema]
    return interface.get_data(build_host_request(args, fields))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the GitHub data connector from the command line"
    )
    parser.add_argument(
        "command",
        choices=["config", "schema", "data"],
        help="Connector operation to run",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML settings file",
    )
    parser.add_argument("--organization", help="Repository owner")
    parser.add_argument("--repository", help="Repository name")
    parser.add_argument(
        "--data-type",
        help="Subconnector to use (e.g. issues, stars)",
    )
    parser.add_argument(
        "--fields",
        help="Comma-separated field names (default: all schema fields)",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Request sample data where the connector supports it",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON-structured log lines",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = ConnectorSettings(args.config)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 2

    setup_logging(settings, verbose=args.verbose, json_logs=args.json_logs)

    github_config = settings.get_github_config()
    client_handle = build_client_handle(settings)
    connector = build_github_connector(
        client_handle,
        api_url=github_config.get("api_url"),
        per_page=github_config.get("per_page", 100),
    )
    credentials = EnvironmentCredentialProvider(github_config.get("token_env", "GITHUB_TOKEN"))
    interface = ConnectorInterface(connector, credentials=credentials)

    try:
        result = run(args, interface)
    except ConnectorError as e:
        logger.debug("Connector call failed", exc_info=True)
        print(e.host_message(), file=sys.stderr)
        return 1
    finally:
        client_handle.reset()

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
