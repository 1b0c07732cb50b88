"""Runtime settings for the calculator shell.

Values come from the environment (optionally a .env file), and CLI flags
override them in intcalc.repl.main.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_FILE = os.path.expanduser("~/.intcalc_history")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_log_level() -> str:
    raw = os.getenv("INTCALC_LOG_LEVEL")
    if raw is None:
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("Ignoring unknown INTCALC_LOG_LEVEL %r; using %s", raw, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


@dataclass
class Config:
    history_file: str = DEFAULT_HISTORY_FILE
    prompt: str = "> "
    log_level: str = DEFAULT_LOG_LEVEL
    show_tokens: bool = False
    show_ast: bool = False

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Config":
        """Build a Config from INTCALC_* environment variables."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        return cls(
            history_file=os.path.expanduser(os.getenv("INTCALC_HISTORY_FILE", DEFAULT_HISTORY_FILE)),
            prompt=os.getenv("INTCALC_PROMPT", "> "),
            log_level=_env_log_level(),
            show_tokens=_env_flag("INTCALC_SHOW_TOKENS"),
            show_ast=_env_flag("INTCALC_SHOW_AST"),
        )
