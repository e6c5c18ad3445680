"""gqlfetch CLI entry point."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

from gqlfetch import __version__
from gqlfetch.config import GraphQLSettings, RequestSettings, Settings, get_settings
from gqlfetch.fetch import run_fetch
from gqlfetch.services.graphql import GraphQLClientError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_GRAPHQL_ERRORS = 2


def _init_logfire(settings: Settings) -> None:
    """Initialize Logfire if available, without failing commands."""
    try:
        from gqlfetch.observability import initialize_logfire

        initialize_logfire(settings)
    except ImportError as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


def _print_data(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _print_validation_error(e: ValidationError) -> None:
    print("\n❌ Configuration Error:\n")
    for error in e.errors():
        print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
    print()


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of settings with command-line options applied."""
    graphql_overrides: dict[str, Any] = {}
    if args.url:
        graphql_overrides["endpoint_url"] = args.url
    if args.timeout is not None:
        graphql_overrides["timeout_seconds"] = args.timeout
    if args.raise_on_errors:
        graphql_overrides["raise_on_errors"] = True

    request_overrides: dict[str, Any] = {}
    if args.query:
        request_overrides["query"] = args.query
    if args.variables:
        variables = json.loads(args.variables)
        if not isinstance(variables, dict):
            raise ValueError("--variables must be a JSON object")
        request_overrides["variables"] = variables
    if args.operation_name:
        request_overrides["operation_name"] = args.operation_name

    updated = settings.model_copy(deep=True)
    updated.graphql = GraphQLSettings(
        **{**settings.graphql.model_dump(), **graphql_overrides}
    )
    updated.request = RequestSettings(
        **{**settings.request.model_dump(), **request_overrides}
    )
    return updated


def cmd_fetch(args: argparse.Namespace) -> int:
    """Send the configured GraphQL request once and print its data."""
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings = _apply_overrides(get_settings(), args)
    except ValidationError as e:
        _print_validation_error(e)
        return EXIT_FAILURE
    except ValueError as e:
        logger.error(f"Invalid arguments: {e}")
        print(f"\n❌ Invalid arguments: {e}\n")
        return EXIT_FAILURE
    except (yaml.YAMLError, OSError) as e:
        logger.error(f"Failed to load config: {e}")
        print(f"\n❌ Failed to load configuration: {e}\n")
        return EXIT_FAILURE

    _init_logfire(settings)

    try:
        result = asyncio.run(run_fetch(settings, output=_print_data))
    except GraphQLClientError as e:
        logger.error(f"Request failed: {e}")
        print(f"\n❌ Request failed: {e}\n")
        return EXIT_FAILURE

    if result.response.has_errors:
        for error in result.response.errors:
            logger.warning(f"GraphQL error: {error}")
        return EXIT_GRAPHQL_ERRORS

    return EXIT_OK


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== gqlfetch Configuration ===\n")
        print(f"Config File: {settings.config_path}\n")

        print("GraphQL:")
        print(f"  Endpoint: {settings.graphql.endpoint_url}")
        print(f"  Timeout: {settings.graphql.timeout_seconds}s")
        print(f"  Max Retries: {settings.graphql.max_retries}")
        print(f"  Backoff Factor: {settings.graphql.backoff_factor}s")
        print(f"  Raise On Errors: {settings.graphql.raise_on_errors}")
        if settings.graphql.headers:
            print(f"  Extra Headers: {', '.join(sorted(settings.graphql.headers))}")
        print()

        print("Request:")
        print(f"  Query: {settings.request.query}")
        print(f"  Variables: {json.dumps(settings.request.variables)}")
        print(f"  Operation Name: {settings.request.operation_name or '(none)'}\n")

        print("API Keys:")
        print(f"  Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")

        return EXIT_OK

    except ValidationError as e:
        _print_validation_error(e)
        return EXIT_FAILURE
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"\n❌ Failed to load configuration: {e}\n")
        return EXIT_FAILURE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="gqlfetch: send one GraphQL request and print its data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"gqlfetch {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_fetch = subparsers.add_parser(
        "fetch",
        help="Send the GraphQL request once and print its data (default)",
    )
    parser_fetch.add_argument("--url", help="GraphQL endpoint URL")
    parser_fetch.add_argument("--query", help="GraphQL query document")
    parser_fetch.add_argument(
        "--variables",
        help="Query variables as a JSON object",
    )
    parser_fetch.add_argument("--operation-name", help="Operation to execute")
    parser_fetch.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds",
    )
    parser_fetch.add_argument(
        "--raise-on-errors",
        action="store_true",
        help="Treat GraphQL errors in the response as a failure",
    )
    parser_fetch.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser_fetch.set_defaults(func=cmd_fetch)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        args = parser.parse_args(["fetch", *argv])

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
