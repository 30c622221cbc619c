"""Shared fixtures."""

from __future__ import annotations

import pytest

from evaluator.config import EvaluatorConfig


@pytest.fixture
def config() -> EvaluatorConfig:
    return EvaluatorConfig(engine_path="fakefish", threads=1, hash_mb=16)
