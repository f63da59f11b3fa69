"""Runtime settings for the deck compiler, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = "KEYNOTEGEN_"
DEFAULT_FALLBACK_THEME = "doings"
DEFAULT_LANGUAGE = "en"
DEFAULT_AUTHOR = "Keynote Builder"


@dataclass(frozen=True)
class Settings:
    fallback_theme: Optional[str] = DEFAULT_FALLBACK_THEME
    language: str = DEFAULT_LANGUAGE
    max_workers: int = 1
    author: str = DEFAULT_AUTHOR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from KEYNOTEGEN_* variables.

        An empty ``KEYNOTEGEN_FALLBACK_THEME`` disables the theme fallback, so
        unknown theme keys are rejected instead of replaced.
        """
        env = os.environ if environ is None else environ

        fallback = env.get("KEYNOTEGEN_FALLBACK_THEME", DEFAULT_FALLBACK_THEME).strip()
        language = env.get("KEYNOTEGEN_LANGUAGE", DEFAULT_LANGUAGE).strip().lower() or DEFAULT_LANGUAGE
        author = env.get("KEYNOTEGEN_AUTHOR", DEFAULT_AUTHOR).strip() or DEFAULT_AUTHOR

        raw_workers = env.get("KEYNOTEGEN_MAX_WORKERS", "1").strip()
        try:
            max_workers = max(1, int(raw_workers))
        except ValueError:
            max_workers = 1

        return cls(
            fallback_theme=fallback or None,
            language=language,
            max_workers=max_workers,
            author=author,
        )

    @classmethod
    def load(cls, env_file: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Settings from ``./.env``, then ``env_file``, then the process environment.

        Later sources win. Only ``KEYNOTEGEN_*`` keys are read from the files and
        ``os.environ`` is left untouched.
        """
        merged: Dict[str, str] = {}
        local = Path.cwd() / ".env"
        if local.is_file():
            merged.update(read_env_file(local))
        if env_file is not None:
            merged.update(read_env_file(Path(env_file).expanduser()))
        merged.update(os.environ if environ is None else environ)
        return cls.from_env(merged)


def read_env_file(path: Path) -> Dict[str, str]:
    """``KEYNOTEGEN_*`` assignments from a dotenv file; quotes around values are dropped."""
    values = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().removeprefix("export ").partition("=")
        key = key.strip()
        if not sep or not key.startswith(ENV_PREFIX):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values
