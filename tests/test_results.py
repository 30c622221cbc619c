"""Tests for the saved batch store."""

from __future__ import annotations

from pathlib import Path

import pytest

from evaluator.models import PositionReport, Variation
from evaluator.results import list_batches, load_batch, save_batch


class TestResultStore:
    def test_save_load_list(self, tmp_path: Path) -> None:
        reports = [
            PositionReport(fen="startpos", variations=[Variation(score=20, move="e2e4", san="e4")]),
            PositionReport(fen="4k3/8/8/8/8/8/8/4K3 w - - 0 1"),
        ]
        path = save_batch(reports, "round1", directory=str(tmp_path))

        assert path == tmp_path / "round1.json"
        assert load_batch("round1", directory=str(tmp_path)) == reports
        assert [item["name"] for item in list_batches(str(tmp_path))] == ["round1"]

    def test_list_missing_directory(self, tmp_path: Path) -> None:
        assert list_batches(str(tmp_path / "nothing")) == []

    def test_load_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_batch("absent", directory=str(tmp_path))
