"""Command-line front end for the face recognition API.

Usage:
    faceapi identify IMAGE [--check-liveness] [--check-deepfake]
    faceapi enroll IMAGE [--template-id ID] [--check-liveness] [--check-deepfake]
    faceapi delete TEMPLATE_ID
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

import httpx

from faceapi.api import ApiResult, FaceApiClient, IdentifyOutcome, deliver, describe_error
from faceapi.config.settings import get_settings
from faceapi.monitoring.logging import configure_logging

logger = logging.getLogger(__name__)


def format_match(outcome: IdentifyOutcome) -> str:
    return f"Match:\n{outcome.template_id.strip()}\nSimilarity: {outcome.similarity:.2f}"


def format_enrolled(template_id: str) -> str:
    return f"Enrolled\nTemplate ID:\n{template_id.strip()}"


def format_deleted(template_id: str) -> str:
    return f"Deleted\nTemplate ID:\n{template_id}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="faceapi", description="Face recognition cloud API client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    identify = subparsers.add_parser("identify", help="Search a photo against enrolled templates")
    identify.add_argument("image", type=Path)
    _add_check_flags(identify)

    enroll = subparsers.add_parser("enroll", help="Enroll a photo as a new template")
    enroll.add_argument("image", type=Path)
    enroll.add_argument("--template-id", default=None, help="Custom template id to assign")
    _add_check_flags(enroll)

    delete = subparsers.add_parser("delete", help="Delete an enrolled template")
    delete.add_argument("template_id")
    return parser


def _add_check_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--check-liveness", action="store_true", help="Ask the service for a liveness check")
    parser.add_argument("--check-deepfake", action="store_true", help="Ask the service for a deepfake check")


async def run_command(client: FaceApiClient, args: argparse.Namespace) -> int:
    """Execute the parsed command, print its status text and return the exit code."""

    statuses: list[tuple[bool, str]] = []

    if args.command == "delete":
        template_id = args.template_id.strip()

        def on_deleted(result: ApiResult[None]) -> None:
            if result.ok:
                statuses.append((True, format_deleted(template_id)))
            else:
                statuses.append((False, f"Delete failed: {describe_error(result.error)}"))

        await deliver(client.delete_template(args.template_id), on_deleted)
    else:
        if not args.image.is_file():
            print("No photo")
            return 1
        image = await asyncio.to_thread(args.image.read_bytes)

        if args.command == "identify":

            def on_identified(result: ApiResult[IdentifyOutcome]) -> None:
                if result.ok:
                    statuses.append((True, format_match(result.unwrap())))
                else:
                    statuses.append((False, describe_error(result.error)))

            operation = client.identify(
                image,
                check_liveness=args.check_liveness,
                check_deepfake=args.check_deepfake,
            )
            await deliver(operation, on_identified)
        else:

            def on_enrolled(result: ApiResult[str]) -> None:
                if result.ok:
                    statuses.append((True, format_enrolled(result.unwrap())))
                else:
                    statuses.append((False, describe_error(result.error)))

            operation = client.enroll(
                image,
                args.template_id,
                check_liveness=args.check_liveness,
                check_deepfake=args.check_deepfake,
            )
            await deliver(operation, on_enrolled)

    ok, text = statuses[0]
    print(text)
    return 0 if ok else 1


async def _main_async(args: argparse.Namespace, transport: httpx.AsyncBaseTransport | None) -> int:
    client = FaceApiClient(get_settings(), transport=transport)
    try:
        return await run_command(client, args)
    finally:
        await client.close()


def main(argv: Sequence[str] | None = None, *, transport: httpx.AsyncBaseTransport | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.debug else None)
    logger.debug("Running %s", args.command)
    return asyncio.run(_main_async(args, transport))


if __name__ == "__main__":
    sys.exit(main())
