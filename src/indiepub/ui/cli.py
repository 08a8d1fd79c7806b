# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from indiepub.app import (
    delete_post_at,
    list_history,
    run_query,
    undelete_post_by_url,
    update_post_at,
)
from indiepub.config import configure_logging
from indiepub.domain.errors import MicropubError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Micropub actions and queries")
    subparsers = parser.add_subparsers(dest="command", required=True)

    query = subparsers.add_parser("query", help="Answer a q= query")
    query.add_argument("q", help="Query type: config, source or syndicate-to")
    query.add_argument("--url", help="Post URL for q=source")
    query.add_argument(
        "--property",
        dest="properties",
        action="append",
        help="Restrict q=source to this property (repeatable)",
    )

    update = subparsers.add_parser("update", help="Apply an update request to a stored post")
    update.add_argument("path", help="Storage path of the post")
    update.add_argument(
        "--request",
        type=Path,
        required=True,
        help="JSON file holding the update request body",
    )

    delete = subparsers.add_parser("delete", help="Delete a stored post")
    delete.add_argument("path", help="Storage path of the post")

    undelete = subparsers.add_parser("undelete", help="Restore the last deleted post at a URL")
    undelete.add_argument("url", help="Canonical URL of the deleted post")

    subparsers.add_parser("history", help="List recorded post actions")

    return parser.parse_args(list(argv))


def _load_request(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as handle:
            body = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Unable to read request {path}: {exc}") from exc
    if not isinstance(body, dict):
        raise ValueError(f"Request {path} must hold a JSON object")
    return body


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        body = _load_request(parsed_args.request) if parsed_args.command == "update" else None
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "query":
            params: dict[str, Any] = {"q": parsed_args.q, "url": parsed_args.url}
            if parsed_args.properties:
                params["properties"] = parsed_args.properties
            response = run_query(params)
            _emit(response.body)
            if not response.ok:
                sys.exit(1)
        elif parsed_args.command == "update" and body is not None:
            _emit(update_post_at(parsed_args.path, body).to_dict())
        elif parsed_args.command == "delete":
            _emit(delete_post_at(parsed_args.path).to_dict())
        elif parsed_args.command == "undelete":
            _emit(undelete_post_by_url(parsed_args.url).to_dict())
        elif parsed_args.command == "history":
            _emit(
                [
                    {"timestamp": entry.timestamp.isoformat(), entry.action: entry.data}
                    for entry in list_history()
                ]
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except MicropubError as exc:
        log.error("%s: %s", exc.error, exc.description)  # noqa: TRY400
        _emit(exc.to_body())
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
