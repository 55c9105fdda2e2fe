"""Shared fixtures for the upckeys test suite."""

from __future__ import annotations

from typing import Iterable, Optional

import pytest

from shared.config import UpcConfig
from shared.logger import ToolLogger
from upckeys.core.engine import KeyRecoveryEngine
from upckeys.core.models import FrequencyBand, SerialFields
from upckeys.derivation.enumerator import CandidateEnumerator

from vectors import REFERENCE_TARGET


@pytest.fixture
def quiet_logger() -> ToolLogger:
    return ToolLogger("test", console_output=False)


@pytest.fixture
def make_engine(quiet_logger):
    """Factory for engines restricted to a few leading digits."""

    def factory(
        d0_range: Optional[Iterable[int]] = None,
        config: Optional[UpcConfig] = None,
    ) -> KeyRecoveryEngine:
        return KeyRecoveryEngine(
            config,
            enumerator=CandidateEnumerator(d0_range=d0_range),
            logger=quiet_logger,
        )

    return factory


@pytest.fixture(scope="session")
def full_scan_matches() -> list[tuple[SerialFields, FrequencyBand]]:
    """Every match for UPC1234567 over the whole serial space."""
    return list(CandidateEnumerator().matches(REFERENCE_TARGET))
