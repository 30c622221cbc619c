"""Tests for the HTTP API."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import evaluator.web_app as web_app
from evaluator.batch import BatchEvaluator
from evaluator.config import EvaluatorConfig, save_config
from evaluator.models import PositionReport, Variation
from evaluator.results import save_batch
from helpers import STARTING_FEN, FakeEngineSession, info


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.chdir(tmp_path)
    return TestClient(web_app.app)


def _script(monkeypatch: pytest.MonkeyPatch, searches) -> None:
    original = web_app.get_evaluator

    def get_evaluator(depth=None, multipv=None) -> BatchEvaluator:
        config = original(depth, multipv).config
        session = FakeEngineSession(searches)
        return BatchEvaluator(config, session_factory=lambda: session)

    monkeypatch.setattr(web_app, "get_evaluator", get_evaluator)


class TestEvaluateEndpoint:
    def test_evaluate(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _script(monkeypatch, [[info(1, 20, "e2e4"), info(2, 15, "d2d4"), "bestmove e2e4"]])

        response = client.post("/api/evaluate", json={"positions": [STARTING_FEN], "depth": 12})

        assert response.status_code == 200
        results = response.json()["results"]
        assert results[0]["fen"] == STARTING_FEN
        assert [v["move"] for v in results[0]["variations"]] == ["e2e4", "d2d4"]

    def test_invalid_position(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _script(monkeypatch, [])
        response = client.post("/api/evaluate", json={"positions": ["garbage"]})
        assert response.status_code == 400

    def test_invalid_depth(self, client: TestClient) -> None:
        response = client.post("/api/evaluate", json={"positions": ["startpos"], "depth": 0})
        assert response.status_code == 400

    def test_protocol_error(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _script(monkeypatch, [["info string unexpected", "bestmove e2e4"]])
        response = client.post("/api/evaluate", json={"positions": ["startpos"]})
        assert response.status_code == 502

    def test_missing_engine(self, client: TestClient, tmp_path: Path) -> None:
        save_config(EvaluatorConfig(engine_path=str(tmp_path / "no-such-engine")))
        response = client.post("/api/evaluate", json={"positions": ["startpos"]})
        assert response.status_code == 503
        assert "Engine not found" in response.json()["detail"]


class TestScoreEndpoint:
    def test_score(self, client: TestClient) -> None:
        response = client.post("/api/score", json={
            "report": {"fen": "startpos", "variations": [{"score": 150, "move": "e2e4", "san": "e4"}]},
            "answer": {"evaluation": 1.5, "best_move": "e4", "player_or_tournament": "Carlsen"},
            "white": "Magnus Carlsen",
        })

        assert response.status_code == 200
        assert response.json()["total_points"] == 180

    def test_score_without_variations(self, client: TestClient) -> None:
        response = client.post("/api/score", json={
            "report": {"fen": "startpos", "variations": []},
            "answer": {"evaluation": 0.0, "best_move": "e4"},
        })
        assert response.status_code == 422


class TestResultsEndpoints:
    def test_list_and_detail(self, client: TestClient, tmp_path: Path) -> None:
        save_batch([PositionReport(fen="startpos", variations=[Variation(score=5, move="e2e4")])],
                   "saved", directory=str(tmp_path / "results"))

        listing = client.get("/api/results").json()["results"]
        assert [item["name"] for item in listing] == ["saved"]

        detail = client.get("/api/results/saved").json()["results"]
        assert detail[0]["variations"][0]["score"] == 5

    def test_unknown_result(self, client: TestClient) -> None:
        assert client.get("/api/results/absent").status_code == 404
