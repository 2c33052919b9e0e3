"""Extract hyperlinks from a document and verify that each one resolves.

Public re-exports so callers can write::

    from linkcheck import extract, verify, ProbeConfig
"""

from linkcheck._version import __version__
from linkcheck.engine import OutcomeStream, RunState, VerificationEngine, VerificationRun, verify
from linkcheck.errors import ConfigurationError, ExtractionError, LinkCheckError
from linkcheck.extractor import extract
from linkcheck.models import LinkSet, Outcome, OutcomeCollection, ProbeConfig, Status
from linkcheck.prober import build_client, probe

__all__ = [
    "__version__",
    "extract",
    "probe",
    "build_client",
    "verify",
    "VerificationEngine",
    "VerificationRun",
    "OutcomeStream",
    "RunState",
    "LinkSet",
    "Outcome",
    "OutcomeCollection",
    "ProbeConfig",
    "Status",
    "LinkCheckError",
    "ExtractionError",
    "ConfigurationError",
]
