"""Reconciliation of ledger entries against the account directory.

Flow per batch:
1) load the directory snapshot once
2) classify every eligible entry as join, renew or partial
3) apply joins and renewals, keeping the snapshot current
4) stamp applied entries as processed and report every outcome
"""

from __future__ import annotations

from .engine import (
    BatchResult,
    EngineSettings,
    ReconciliationEngine,
    create_with_generation,
    register_groups,
)
from .importer import ImportResult, MemberImporter
from .matching import (
    Classification,
    Decision,
    Match,
    classify,
    match,
    match_values,
    record_values,
)

__all__ = [
    "BatchResult",
    "Classification",
    "Decision",
    "EngineSettings",
    "ImportResult",
    "Match",
    "MemberImporter",
    "ReconciliationEngine",
    "classify",
    "create_with_generation",
    "match",
    "match_values",
    "record_values",
    "register_groups",
]
