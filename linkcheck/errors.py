"""Structural errors that abort a link-check run.

A link that cannot be reached is *not* an error: the prober records it as
``Status.UNREACHABLE`` and the run carries on.
"""

from __future__ import annotations


class LinkCheckError(Exception):
    """Base class for every error raised by the ``linkcheck`` package."""


class ExtractionError(LinkCheckError):
    """The link pattern could not be compiled."""


class ConfigurationError(LinkCheckError):
    """A ``ProbeConfig`` cannot drive a run (e.g. zero workers)."""
