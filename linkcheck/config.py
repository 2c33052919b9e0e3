"""Centralised settings for the link checker.

Raw values come from environment variables or a ``.env`` file found from the
current working directory (loaded when this module is imported).  They are
kept as strings here and only validated by :func:`resolve_probe_config`, so
that a bad value can fall back to its default with a warning instead of
aborting the run.

The core (extractor, prober, engine) never imports this module; it receives
a ready :class:`~linkcheck.models.ProbeConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from linkcheck.models import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    DEFAULT_WORKERS,
    ProbeConfig,
)

load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Input document
    # ------------------------------------------------------------------
    file_path: str = field(
        default_factory=lambda: os.environ.get("INPUT_FILE_PATH", "")
    )

    # ------------------------------------------------------------------
    # Probing
    # ------------------------------------------------------------------
    concurrent_workers: str = field(
        default_factory=lambda: os.environ.get("INPUT_CONCURRENT_WORKERS", "")
    )
    timeout_seconds: str = field(
        default_factory=lambda: os.environ.get("INPUT_TIMEOUT_SECONDS", "")
    )
    max_redirects: str = field(
        default_factory=lambda: os.environ.get("INPUT_MAX_REDIRECTS", "")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("INPUT_USER_AGENT", DEFAULT_USER_AGENT)
    )


def _parse_int(
    raw: str | None,
    *,
    name: str,
    default: int,
    minimum: int,
    default_label: str,
    warnings: list[str],
) -> int:
    """Parse *raw* as an int ≥ *minimum*, falling back to *default*.

    Empty input silently yields the default; anything unparsable or out of
    range appends a two-line warning to *warnings*.
    """
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        value = None
    if value is None or value < minimum:
        warnings.append(f"⚠️ Invalid {name}: {raw}")
        warnings.append(f"ℹ️ Using default value of {default} {default_label}.")
        return default
    return value


def resolve_probe_config(
    workers: str | None = None,
    timeout: str | None = None,
    max_redirects: str | None = None,
    user_agent: str | None = None,
) -> tuple[ProbeConfig, list[str]]:
    """Build a :class:`ProbeConfig` from raw strings.

    Returns:
        The config and the list of warning lines to show the user (empty
        when every value was usable).
    """
    warnings: list[str] = []
    config = ProbeConfig(
        worker_count=_parse_int(
            workers,
            name="concurrent_workers",
            default=DEFAULT_WORKERS,
            minimum=1,
            default_label="for concurrent workers",
            warnings=warnings,
        ),
        timeout=_parse_int(
            timeout,
            name="timeout_seconds",
            default=DEFAULT_TIMEOUT_SECONDS,
            minimum=1,
            default_label="seconds for timeout",
            warnings=warnings,
        ),
        max_redirects=_parse_int(
            max_redirects,
            name="max_redirects",
            default=DEFAULT_MAX_REDIRECTS,
            minimum=0,
            default_label="for max redirects",
            warnings=warnings,
        ),
        user_agent=user_agent or DEFAULT_USER_AGENT,
    )
    return config, warnings


# Module-level singleton — import this everywhere:
#   from linkcheck.config import settings
settings = Settings()
