"""Utilities for rendering link-check results in the CLI."""

from __future__ import annotations

from linkcheck.models import OutcomeCollection

REACHABLE_HEADER = "✅ Working URLs:"
UNREACHABLE_HEADER = "\n\n❌ Invalid URLs:"


def render_link(link: str) -> str:
    return f"- {link}"


def render_summary(outcomes: OutcomeCollection) -> str:
    """One-line tally, e.g. ``Checked 3 link(s): 2 reachable, 1 unreachable.``"""
    return (
        f"Checked {len(outcomes)} link(s): "
        f"{len(outcomes.reachable)} reachable, {len(outcomes.unreachable)} unreachable."
    )
