"""
Web Application
FastAPI backend for batch position evaluation
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .batch import BatchEvaluator
from .config import load_config
from .errors import ConfigError, EvaluatorError, InputError
from .models import PositionReport, batch_to_dicts
from .results import list_batches, load_batch
from .scoring import Answer, PointsSolver

logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="Chess Position Evaluator")


# Pydantic models
class EvaluateRequest(BaseModel):
    positions: List[str]
    depth: Optional[int] = None
    multipv: Optional[int] = None


class VariationModel(BaseModel):
    score: int
    move: str
    san: Optional[str] = None
    mate: Optional[int] = None


class ReportModel(BaseModel):
    fen: str
    variations: List[VariationModel]


class AnswerModel(BaseModel):
    evaluation: float
    best_move: str
    player_or_tournament: str = ""


class ScoreRequest(BaseModel):
    report: ReportModel
    answer: AnswerModel
    white: str = ""
    black: str = ""
    tournament: str = ""


def get_evaluator(depth: Optional[int] = None, multipv: Optional[int] = None) -> BatchEvaluator:
    """Build an evaluator from the config file plus request overrides"""
    config = load_config().with_overrides(depth=depth, multipv=multipv)
    return BatchEvaluator(config)


# API Endpoints

@app.post("/api/evaluate")
def evaluate(request: EvaluateRequest):
    """Evaluate a batch of positions (blocks a worker thread until done)"""
    try:
        evaluator = get_evaluator(request.depth, request.multipv)
        reports = evaluator.evaluate(request.positions)
    except (InputError, ConfigError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except EvaluatorError as e:
        logger.error(f"Evaluation failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return {"results": batch_to_dicts(reports)}


@app.post("/api/score")
def score(request: ScoreRequest):
    """Score an answer against an engine report"""
    report = PositionReport.from_dict(request.report.model_dump())
    answer = Answer(**request.answer.model_dump())

    try:
        solver = PointsSolver(
            report,
            answer,
            players=(request.white, request.black),
            tournament=request.tournament,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return solver.breakdown()


@app.get("/api/results")
def get_results():
    """Get list of saved batch results"""
    return {"results": list_batches()}


@app.get("/api/results/{result_name}")
def get_result_detail(result_name: str):
    """Get a saved batch result"""
    try:
        reports = load_batch(result_name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Result not found")

    return {"results": batch_to_dicts(reports)}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.info("Starting Chess Position Evaluator Web Server")
    logger.info("Access at: http://localhost:8000")

    uvicorn.run(app, host="0.0.0.0", port=8000)
