"""HugeGraph dump restoration module.

This module provides functionality for restoring a dumped HugeGraph dataset
(schema objects, vertices, edges) through the REST API, including concurrent
restoration of sharded vertex/edge dumps, batched uploads with retry, and
primary-key vertex id sanitization.
"""

from graphvault.restoration.decoder import RecordDecoder
from graphvault.restoration.orchestrator import RestoreOrchestrator
from graphvault.restoration.results import RestoreSummary, UnitFailure

__all__ = [
    "RecordDecoder",
    "RestoreOrchestrator",
    "RestoreSummary",
    "UnitFailure",
]
