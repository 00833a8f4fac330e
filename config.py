"""
Centralized configuration for the interaction gate bot.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _parse_int_list(env_var: str, default: list[int]) -> list[int]:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return [int(x.strip()) for x in raw.split(",") if x.strip()]
    except ValueError:
        return default


def _parse_optional_int(env_var: str) -> int | None:
    raw = os.getenv(env_var)
    if not raw:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN")
DB_PATH = os.getenv("DB_PATH", "gate_bot.db")

# Owners bypass every authorization check and all rate limits
BOT_OWNER_IDS: list[int] = _parse_int_list("BOT_OWNER_IDS", [])
# Helpers may run helper-only commands; empty means owner-only
HELPER_USER_IDS: list[int] = _parse_int_list("HELPER_USER_IDS", [])

# Development mode: debug line per command, failures are not counted
DEVELOPMENT_MODE = _parse_bool("DEVELOPMENT_MODE", False)

# Canary builds sync commands to a single guild instead of globally
IS_CANARY = _parse_bool("IS_CANARY", False)
DEV_GUILD_ID: int | None = _parse_optional_int("DEV_GUILD_ID")

# Upper bound on a command handler's run time; 0 disables the timeout
COMMAND_TIMEOUT_SECONDS = _parse_float("COMMAND_TIMEOUT_SECONDS", 0.0)

# How often expired rate-limit buckets are evicted
RATE_LIMIT_SWEEP_INTERVAL_SECONDS = _parse_int("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", 300)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
