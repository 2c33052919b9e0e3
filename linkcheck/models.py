"""Value types passed between the extractor, the prober and the engine.

All of them are immutable: a ``ProbeConfig`` is shared by every worker thread
and outcomes are handed across threads through the engine's streams.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from linkcheck._version import __version__

DEFAULT_WORKERS = 30
DEFAULT_TIMEOUT_SECONDS = 5
DEFAULT_MAX_REDIRECTS = 10
DEFAULT_USER_AGENT = f"linkcheck/{__version__}"

# An ordered, duplicate-free sequence of ``http(s)://`` links.
LinkSet = tuple[str, ...]


class Status(str, Enum):
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class ProbeConfig:
    """Read-only settings shared by every probe in a run."""

    worker_count: int = DEFAULT_WORKERS
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class Outcome:
    """The classification of a single link."""

    link: str
    status: Status


@dataclass(frozen=True)
class OutcomeCollection:
    """Reachable and unreachable outcomes of a finished run."""

    reachable: tuple[Outcome, ...] = field(default_factory=tuple)
    unreachable: tuple[Outcome, ...] = field(default_factory=tuple)

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    @property
    def reachable_links(self) -> list[str]:
        return [o.link for o in self.reachable]

    @property
    def unreachable_links(self) -> list[str]:
        return [o.link for o in self.unreachable]

    @property
    def has_unreachable(self) -> bool:
        return bool(self.unreachable)

    def __len__(self) -> int:
        return len(self.reachable) + len(self.unreachable)
