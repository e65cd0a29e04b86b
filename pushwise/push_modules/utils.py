"""Shared utilities: environment loading, settings, logging and text wrapping."""

from __future__ import annotations

import logging
import os
import re
import sys
import textwrap
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

PROJECT_NAME = "pushwise"
WRAP_WIDTH = 80

DEFAULT_PUSH_ENV_FILENAMES = (
    ".env.pushwise",
    ".env.pushwise.local",
)


class PushSettings(BaseModel):
    """Values read from ``PUSHWISE_*`` environment variables."""

    username: Optional[str] = None
    password: Optional[str] = None
    ssh_key: Optional[str] = None
    log_root: Optional[str] = None

    @classmethod
    def from_env(cls) -> "PushSettings":
        def read(name: str) -> Optional[str]:
            value = os.environ.get(f"PUSHWISE_{name}", "").strip()
            return value or None

        return cls(
            username=read("USERNAME"),
            password=read("PASSWORD"),
            ssh_key=read("SSH_KEY"),
            log_root=read("LOG_ROOT"),
        )


def _resolve_env_path(path: Path, root: Path) -> Path:
    """Resolve environment file paths relative to the repository root."""

    if path.is_absolute():
        return path
    return root / path


def load_push_env(root: Path) -> list[Path]:
    """Load dotenv files for ``root``, pushwise-specific files taking precedence.

    Returns the files that were loaded.
    """

    loaded: list[Path] = []
    root_env = root / ".env"
    if root_env.is_file():
        load_dotenv(root_env, override=False)
        loaded.append(root_env)

    override = os.getenv("PUSHWISE_ENV_FILE", "").strip()
    if override:
        candidates = [
            _resolve_env_path(Path(entry.strip()).expanduser(), root)
            for entry in override.split(os.pathsep)
            if entry.strip()
        ]
    else:
        candidates = [root / name for name in DEFAULT_PUSH_ENV_FILENAMES]

    for env_path in candidates:
        if env_path.is_file():
            load_dotenv(env_path, override=True)
            loaded.append(env_path)
    return loaded


def default_log_file(settings: PushSettings) -> Path | None:
    """Log file under ``PUSHWISE_LOG_ROOT``, if configured."""

    if not settings.log_root:
        return None
    return Path(settings.log_root).expanduser() / f"{PROJECT_NAME}.log"


def setup_logger(verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Configure the package logger for console and, optionally, file output."""

    logger = logging.getLogger(PROJECT_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)
        logger.debug(f"Log file: {log_file}")

    return logger


def wrap(text: str, width: int = WRAP_WIDTH) -> str:
    """Re-flow each paragraph of ``text``.

    Paragraphs are separated by blank lines. A paragraph whose first line is
    indented is treated as preformatted and left untouched.
    """

    paragraphs = []
    for paragraph in re.split(r"\n[ \t]*\n+", textwrap.dedent(text).strip("\n")):
        if not paragraph.strip():
            continue
        if paragraph[:1].isspace():
            paragraphs.append(paragraph.rstrip())
        else:
            paragraphs.append(textwrap.fill(" ".join(paragraph.split()), width=width))
    return "\n\n".join(paragraphs)


__all__ = [
    "DEFAULT_PUSH_ENV_FILENAMES",
    "PROJECT_NAME",
    "PushSettings",
    "default_log_file",
    "load_push_env",
    "setup_logger",
    "wrap",
]
