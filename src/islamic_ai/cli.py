"""Command-line front end.

Examples:
- islamic-ai ask "What is the significance of Ramadan?"
- islamic-ai explain Al-Fatihah 1
- islamic-ai dua --history-file ~/.islamic_ai/history.json
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
import sys
from typing import TYPE_CHECKING

from islamic_ai.adapter import GenerationAdapter
from islamic_ai.config import Config
from islamic_ai.errors import (
    ConfigurationError,
    DuaExhausted,
    IslamicAIError,
    ProviderError,
    StorageError,
)
from islamic_ai.history import JSONFileStore, NoveltyTracker
from islamic_ai.session import DuaSession

if TYPE_CHECKING:
    from collections.abc import Sequence

    from islamic_ai.types import DuaRecord

HISTORY_FILE_ENV_VAR = "ISLAMIC_AI_HISTORY_FILE"
DEFAULT_HISTORY_FILE = Path("~/.islamic_ai/history.json")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def default_history_file() -> Path:
    override = os.environ.get(HISTORY_FILE_ENV_VAR)
    path = Path(override) if override else DEFAULT_HISTORY_FILE
    return path.expanduser()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="islamic-ai",
        description="Your guide to Islamic knowledge, duas, and Quranic wisdom.",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="Optional API key override. Usually read from GEMINI_API_KEY.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Ask a question about Islam.")
    ask.add_argument("question", nargs="+", help="The question to ask.")
    ask.add_argument("--model", default=None, help="Override the answer model.")

    explain = sub.add_parser("explain", help="Explain a Quran verse.")
    explain.add_argument("surah", help="Surah name or number, e.g. Al-Fatihah or 1.")
    explain.add_argument("ayah", help="Ayah number, e.g. 1.")
    explain.add_argument("--model", default=None, help="Override the explain model.")

    dua = sub.add_parser("dua", help="Receive a daily dua you have not seen yet.")
    dua.add_argument(
        "--history-file",
        type=Path,
        default=None,
        help=f"Where seen dua ids are stored (default: ${HISTORY_FILE_ENV_VAR} "
        f"or {DEFAULT_HISTORY_FILE}).",
    )
    dua.add_argument(
        "--reset", action="store_true", help="Forget seen duas before fetching."
    )
    dua.add_argument("--model", default=None, help="Override the dua model.")
    return parser


def build_config(args: argparse.Namespace) -> Config:
    overrides: dict[str, str] = {}
    if args.model:
        field_name = {
            "ask": "answer_model",
            "explain": "explain_model",
            "dua": "dua_model",
        }[args.command]
        overrides[field_name] = args.model
    return Config(api_key=args.api_key, **overrides)


def format_dua(record: DuaRecord) -> str:
    return "\n".join(
        [
            record.arabic,
            "",
            record.transliteration,
            "",
            f'"{record.translation}"',
            "",
            f"Source: {record.source}",
            f"Tip: {record.tip}",
        ]
    )


async def _run(args: argparse.Namespace, config: Config) -> str:
    adapter = GenerationAdapter(config)
    try:
        if args.command == "ask":
            return await adapter.answer_question(" ".join(args.question))
        if args.command == "explain":
            return await adapter.explain_verse(args.surah, args.ayah)

        history_file = args.history_file or default_history_file()
        tracker = NoveltyTracker(
            JSONFileStore(history_file.expanduser()), limit=config.history_limit
        )
        if args.reset:
            tracker.clear()
        session = DuaSession(adapter, tracker)
        return format_dua(await session.next_dua())
    finally:
        await adapter.aclose()


def _with_hint(exc: IslamicAIError) -> str:
    return f"{exc.message} Hint: {exc.hint}" if exc.hint else exc.message


def validate_args(args: argparse.Namespace) -> str | None:
    """Return a user-facing message when the input is unusable."""
    if args.command == "ask" and not " ".join(args.question).strip():
        return "Please enter a question."
    if args.command == "explain" and not (args.surah.strip() and args.ayah.strip()):
        return "Please enter both Surah and Ayah."
    return None


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``islamic-ai`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Without --verbose the package NullHandler keeps stderr to the final message.
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    problem = validate_args(args)
    if problem is not None:
        print(problem, file=sys.stderr)
        return EXIT_USAGE

    try:
        config = build_config(args)
        output = asyncio.run(_run(args, config))
    except ConfigurationError as exc:
        print(f"Configuration error: {_with_hint(exc)}", file=sys.stderr)
        return EXIT_USAGE
    except DuaExhausted as exc:
        print(exc.message)
        return EXIT_OK
    except (ProviderError, StorageError) as exc:
        print(_with_hint(exc), file=sys.stderr)
        return EXIT_FAILED
    except IslamicAIError as exc:
        # Decode details stay in the debug log.
        print(exc.message, file=sys.stderr)
        return EXIT_FAILED

    print(output)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
