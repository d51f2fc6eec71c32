"""
Command-line interface for the Graph client.

Provides commands for single calls and batches against Microsoft Graph.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import structlog

from microsoft_graph import __version__
from microsoft_graph.config import get_config, set_config
from microsoft_graph.core.client import Graph
from microsoft_graph.core.errors import GraphError
from microsoft_graph.core.methods import HttpMethod
from microsoft_graph.core.response import GraphObject


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout carries command output
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def _key_value(text: str) -> tuple:
    key, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return key, value


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="microsoft-graph",
        description="Call the Microsoft Graph API",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--token",
        help="Bearer token (default: GRAPH_TOKEN)",
    )
    parser.add_argument(
        "--api-version",
        help="Graph API version (default: 1.0)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Output logs in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Call command
    call_parser = subparsers.add_parser("call", help="Make a single Graph call")
    call_parser.add_argument(
        "method",
        type=str.upper,
        choices=[method.value for method in HttpMethod],
        help="HTTP method",
    )
    call_parser.add_argument(
        "endpoint",
        help="Endpoint below the version segment, e.g. /me",
    )
    call_parser.add_argument(
        "--param",
        action="append",
        type=_key_value,
        default=[],
        help="Query parameter as KEY=VALUE (repeatable)",
    )
    call_parser.add_argument(
        "--header",
        action="append",
        type=_key_value,
        default=[],
        help="Request header as KEY=VALUE (repeatable)",
    )
    call_parser.add_argument(
        "--body",
        type=json.loads,
        help="JSON request body",
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Run requests from a JSON file through $batch")
    batch_parser.add_argument(
        "file",
        type=Path,
        help="JSON list of {endpoint, id, method, headers, params, body, depends_on}",
    )
    batch_parser.add_argument(
        "--size",
        type=int,
        help="Requests per $batch call (default: 20)",
    )

    return parser


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, GraphObject):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _print_json(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), indent=2))


def run_call(graph: Graph, args: argparse.Namespace) -> None:
    """Make a single call and print its response."""
    response = graph.call(
        args.endpoint,
        method=args.method,
        headers=dict(args.header),
        params=dict(args.param) or None,
        body=args.body,
    )
    _print_json(response)


def run_batch(graph: Graph, args: argparse.Namespace) -> None:
    """Run the requests listed in a file as a batch and print the results."""
    entries = json.loads(args.file.read_text(encoding="utf-8"))

    with graph.batch(size=args.size) as batch:
        for entry in entries:
            batch.add(
                entry["endpoint"],
                id=entry.get("id"),
                method=entry.get("method", "GET"),
                headers=entry.get("headers"),
                params=entry.get("params"),
                body=entry.get("body"),
                depends_on=entry.get("depends_on"),
            )

    _print_json([
        {
            "id": result.request.id,
            "method": result.request.method.value,
            "url": result.request.url,
            "response": result.response,
        }
        for result in batch.results
    ])


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    overrides = {
        "token": args.token,
        "version": args.api_version,
        "log_level": args.log_level,
        "log_json": args.log_json or None,
    }
    config = get_config().model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )
    set_config(config)

    # Setup logging
    setup_logging(config.log_level, config.log_json)

    with Graph(config=config) as graph:
        try:
            if args.command == "call":
                run_call(graph, args)
            elif args.command == "batch":
                run_batch(graph, args)
        except GraphError as e:
            print(f"Error: {e}", file=sys.stderr)
            if e.response is not None:
                _print_json(e.response)
            sys.exit(1)


if __name__ == "__main__":
    main()
