"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="maximizer-connector",
        description="Maximizer CRM connector: OAuth2 setup and Custom record operations",
    )
    parser.add_argument(
        "--credentials",
        type=Path,
        default=None,
        metavar="FILE",
        help="Credentials YAML (maximizerurl, clientid, clientsecret, redirect_uri, tokens). "
        "Refreshed tokens are written back. Default: MAXIMIZER_* environment variables",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v for INFO logging, -vv for DEBUG",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # authorize-url
    authorize_parser = subparsers.add_parser("authorize-url", help="Print the OAuth2 authorization URL")
    authorize_parser.add_argument("--state", type=str, default=None, help="Opaque state value")

    # token
    token_parser = subparsers.add_parser("token", help="Exchange an authorization code for tokens")
    token_parser.add_argument("--code", type=str, required=True, help="Authorization code from the redirect")
    token_parser.add_argument("--redirect-uri", type=str, default=None, help="Override stored redirect_uri")

    # refresh
    subparsers.add_parser("refresh", help="Refresh the access token")

    # test
    subparsers.add_parser("test", help="Verify the connection and print the account label")

    # create
    create_parser = subparsers.add_parser("create", help="Create a Custom record")
    create_parser.add_argument("--name", type=str, required=True, help="Record name")
    create_parser.add_argument("--description", type=str, default=None)
    create_parser.add_argument("--text1", type=str, default=None)
    create_parser.add_argument("--number1", type=int, default=None)
    create_parser.add_argument("--numeric1", type=float, default=None)
    create_parser.add_argument("--datetime1", type=str, default=None, help="ISO-8601 date/time")
    create_parser.add_argument("--output", type=Path, default=None, help="Write JSON to file")

    # search
    search_parser = subparsers.add_parser("search", help="Search Custom records by name")
    search_parser.add_argument("--name", type=str, required=True, help="Name, may include % wildcards")
    search_parser.add_argument("--output", type=Path, default=None, help="Write JSON to file")

    # poll
    poll_parser = subparsers.add_parser("poll", help="List Custom records created by this connector")
    poll_parser.add_argument("--output", type=Path, default=None, help="Write JSON to file")

    args = parser.parse_args()
    _configure_logging(args.verbose)

    from maximizer_connector.errors import ConnectorError

    try:
        if args.command == "authorize-url":
            _run_authorize_url(args)
        elif args.command == "token":
            _run_token(args)
        elif args.command == "refresh":
            _run_refresh(args)
        elif args.command == "test":
            _run_test(args)
        elif args.command in ("create", "search", "poll"):
            _run_operation(args)
        else:
            parser.print_help()
    except ConnectorError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load_credentials(args: argparse.Namespace):
    from maximizer_connector.models.credentials import Credentials

    if args.credentials is not None:
        return Credentials.from_yaml(args.credentials)
    return Credentials.from_env()


def _store_credentials(args: argparse.Namespace, credentials) -> None:
    """Persist credentials when they came from a file; otherwise print a notice."""
    if args.credentials is not None:
        credentials.to_yaml(args.credentials)
        print(f"Updated tokens in {args.credentials}", file=sys.stderr)
    else:
        print("Tokens not persisted (no --credentials file).", file=sys.stderr)


def _emit(data: Any, output: Path | None = None) -> None:
    text = json.dumps(data, indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        count = len(data) if isinstance(data, list) else 1
        print(f"Wrote {count} record(s) to {output}")
    else:
        print(text)


def _run_authorize_url(args: argparse.Namespace) -> None:
    """Run authorize-url command."""
    from maximizer_connector.auth import MaximizerAuth

    credentials = _load_credentials(args)
    print(MaximizerAuth().authorize_url(credentials, state=args.state))


def _run_token(args: argparse.Namespace) -> None:
    """Run token command."""
    from maximizer_connector.auth import MaximizerAuth

    credentials = _load_credentials(args)
    input_data = {"code": args.code}
    if args.redirect_uri:
        input_data["redirect_uri"] = args.redirect_uri
    tokens = MaximizerAuth().acquire_token(credentials, input_data)
    _store_credentials(args, credentials.merged(input_data).with_tokens(tokens))
    print("Access token acquired.")


def _run_refresh(args: argparse.Namespace) -> None:
    """Run refresh command."""
    from maximizer_connector.auth import MaximizerAuth

    credentials = _load_credentials(args)
    tokens = MaximizerAuth().refresh_token(credentials)
    _store_credentials(args, credentials.with_tokens(tokens))
    print("Access token refreshed.")


def _run_test(args: argparse.Namespace) -> None:
    """Run test command."""
    from maximizer_connector.app import MaximizerApp
    from maximizer_connector.auth import connection_label

    credentials = _load_credentials(args)
    invocation = MaximizerApp().test(credentials)
    if invocation.refreshed:
        _store_credentials(args, invocation.credentials)
    print(f"Connected: {connection_label(invocation.result)}")


def _run_operation(args: argparse.Namespace) -> None:
    """Run create, search, or poll."""
    from maximizer_connector.app import MaximizerApp
    from maximizer_connector.operations.custom.fields import OPERATION_KEY

    kind = {"create": "create", "search": "search", "poll": "trigger"}[args.command]
    input_data: dict[str, Any] = {}
    for field in ("name", "description", "text1", "number1", "numeric1", "datetime1"):
        value = getattr(args, field, None)
        if value is not None:
            input_data[field] = value

    credentials = _load_credentials(args)
    invocation = MaximizerApp().run(kind, OPERATION_KEY, credentials, input_data)
    if invocation.refreshed:
        _store_credentials(args, invocation.credentials)
    _emit(invocation.result, args.output)


if __name__ == "__main__":
    main()
