"""
upckeys Core Module
====================

Contains the data models and the central engine for the upckeys
recovery tool.  The engine lives in :mod:`upckeys.core.engine` and is
imported from there, since it depends on the derivation package which
in turn depends on these models.
"""

from upckeys.core.models import (
    CandidateKey,
    FrequencyBand,
    RecoveryReport,
    SerialFields,
    TargetEssid,
)

__all__ = [
    "CandidateKey",
    "FrequencyBand",
    "RecoveryReport",
    "SerialFields",
    "TargetEssid",
]
