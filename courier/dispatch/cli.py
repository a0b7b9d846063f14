"""
Where: courier/dispatch/cli.py
What: Command-line front-end for dispatch and signed transfers.
Why: Exercise the request layer from scripts and CI without an application shell.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from .config import DispatchConfig
from .core.exceptions import CourierError
from .core.logging_config import setup_logging
from .core.response_decoder import NO_CONTENT
from .lifecycle import open_gate
from .models.request import RequestOptions
from .models.transfer_file import TransferFile
from .services.transfer import SignedTransferOrchestrator

logger = logging.getLogger("courier.cli")


def _parse_query(values: list[str] | None) -> dict[str, str]:
    query: dict[str, str] = {}
    for value in values or []:
        key, sep, item = value.partition("=")
        if not sep or key.strip() == "":
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{value}'")
        query[key.strip()] = item
    return query


def _format_payload(payload: Any) -> str:
    if payload is NO_CONTENT:
        return ""
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, ensure_ascii=False, indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="courier",
        description="Environment-aware requests and signed object-storage transfers.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    get = subparsers.add_parser("get", help="GET a route and print the decoded payload")
    get.add_argument("route", help="Absolute URL or path relative to APP_ORIGIN")
    get.add_argument("-q", "--query", action="append", help="Query parameter KEY=VALUE")
    get.add_argument("--mock", help="JSON payload returned in demo environments")

    upload = subparsers.add_parser("upload", help="Upload a file via a signed URL ticket")
    upload.add_argument("route", help="Ticket-issuing endpoint")
    upload.add_argument("file", help="Local file to upload")
    upload.add_argument("-q", "--query", action="append", help="Ticket query KEY=VALUE")
    upload.add_argument("--content-type", default=None, help="Override the guessed type")

    download = subparsers.add_parser("download-url", help="Print a signed download URL")
    download.add_argument("route", help="Download-link endpoint")
    download.add_argument("file_path", help="Storage path of the file")
    download.add_argument("-q", "--query", action="append", help="Extra query KEY=VALUE")

    return parser


async def _execute(args: argparse.Namespace, dispatch_config: DispatchConfig) -> str:
    query = _parse_query(args.query)
    async with open_gate(dispatch_config) as gate:
        if args.command == "get":
            kwargs = {}
            if args.mock is not None:
                kwargs["mock"] = json.loads(args.mock)
            payload = await gate.dispatch(args.route, RequestOptions(query=query), **kwargs)
            return _format_payload(payload)

        orchestrator = SignedTransferOrchestrator(gate)
        if args.command == "upload":
            file = TransferFile.from_path(args.file, content_type=args.content_type)
            return await orchestrator.upload_file(args.route, file, query)

        return await orchestrator.get_download_url(args.file_path, args.route, query)


def run(argv: list[str], dispatch_config: DispatchConfig | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if dispatch_config is None:
        from .config import config as dispatch_config

    try:
        output = asyncio.run(_execute(args, dispatch_config))
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except CourierError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


def main() -> None:
    setup_logging()
    raise SystemExit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
