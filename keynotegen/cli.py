"""CLI orchestration for the deck compiler."""

from __future__ import annotations

import argparse
import logging
import traceback
from pathlib import Path
from typing import Any, Optional, Sequence

from .api import compile_presentation, write_export
from .config import Settings
from .errors import InvalidInputError
from .labels import LANGUAGES
from .themes import FONT_FAMILIES, THEMES, is_premium, theme_keys
from .validation import load_request_file


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compile keynote decks from JSON render requests")
    parser.add_argument("--input", help="Path to a JSON request: {document, style, parts?}")
    parser.add_argument(
        "--output",
        help="Output file path, or a directory to receive the derived filename",
    )
    parser.add_argument("--parts", type=int, default=None, help="Split the deck into N parts (zip bundle)")
    parser.add_argument("--theme", default=None, help="Override style.themeKey")
    parser.add_argument("--language", default=None, choices=list(LANGUAGES), help="Override style.language")
    parser.add_argument("--env-file", default=None, help="Optional .env file with KEYNOTEGEN_* settings")
    parser.add_argument("--list-themes", action="store_true", help="Print the theme registry and exit")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full traceback for unexpected errors",
    )
    return parser


def _apply_overrides(payload: Any, args: argparse.Namespace) -> Any:
    if not isinstance(payload, dict):
        return payload
    payload = dict(payload)
    style = payload.get("style")
    style = dict(style) if isinstance(style, dict) else ({} if style is None else style)
    if isinstance(style, dict):
        if args.theme:
            for alias in ("theme", "palette"):
                style.pop(alias, None)
            style["themeKey"] = args.theme
        if args.language:
            style["language"] = args.language
    payload["style"] = style
    if args.parts is not None:
        payload["parts"] = args.parts
    return payload


def _print_themes() -> None:
    for key in theme_keys():
        theme = THEMES.get(key)
        if theme is None:
            print(f"{key}\tstandard\t(five user colors)")
            continue
        family = "premium" if is_premium(key) else "standard"
        print(f"{key}\t{family}\t{theme.name}\t#{theme.primary} #{theme.secondary} #{theme.accent}")
    print("fonts: " + ", ".join(f"{k}={v.title}" for k, v in FONT_FAMILIES.items()))


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_themes:
        _print_themes()
        return
    if not args.input or not args.output:
        parser.error("--input and --output are required")

    try:
        settings = Settings.load(Path(args.env_file) if args.env_file else None)

        payload = _apply_overrides(load_request_file(Path(args.input).resolve()), args)
        result = compile_presentation(payload, settings=settings)
        saved = write_export(result, Path(args.output).resolve())
        print(f"✅ PPTX saved to {saved}")
    except InvalidInputError as e:
        raise SystemExit(str(e)) from e
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"Deck compilation failed: {e}") from e


def main() -> None:
    run_cli()
