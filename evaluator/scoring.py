"""
Points Scoring
Scores a guess about a position against the engine's report

1. 20 points for correctly guessing the winning side
2. Eval points: -16 * |guess - actual| + 50 (pawns)
3. Guessing one of the reported moves multiplies the eval points by
   max(-0.75 * |move eval - best eval| + 3, 1)
4. 10 points for naming a player or the tournament
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .models import PositionReport, Variation


@dataclass
class Answer:
    """A guess about a position"""
    evaluation: float  # pawns
    best_move: str
    player_or_tournament: str = ""


class PointsSolver:
    """Points awarded for one answered position"""

    def __init__(self,
                 report: PositionReport,
                 answer: Answer,
                 players: Tuple[str, str] = ("", ""),
                 tournament: str = ""):
        if not report.variations:
            raise ValueError(f"No engine variations to score against for {report.fen}")
        self.report = report
        self.answer = answer
        self.players = players
        self.tournament = tournament

    @property
    def top_evaluation(self) -> float:
        return self.report.variations[0].evaluation

    def _guessed_variation(self) -> Optional[Variation]:
        guess = self.answer.best_move.strip()
        for variation in self.report.variations:
            if guess in (variation.move, variation.san):
                return variation
        return None

    def found_winning_side(self) -> bool:
        return self.answer.evaluation * self.top_evaluation > 0

    def eval_points(self) -> float:
        return -16 * abs(self.answer.evaluation - self.top_evaluation) + 50

    def found_best_move(self) -> bool:
        """True if the guessed move is one of the reported variations"""
        return self._guessed_variation() is not None

    def best_move_multiplier(self) -> float:
        variation = self._guessed_variation()
        if variation is None:
            return 1
        return max(-0.75 * abs(variation.evaluation - self.top_evaluation) + 3, 1)

    def found_player_or_tournament(self) -> bool:
        possible_words = set()
        for text in (*self.players, self.tournament):
            possible_words.update(word for word in text.split(" ") if word)

        return any(
            word in possible_words
            for word in self.answer.player_or_tournament.split(" ")
            if word
        )

    def total_points(self) -> float:
        return ((20 if self.found_winning_side() else 0)
                + self.eval_points() * self.best_move_multiplier()
                + (10 if self.found_player_or_tournament() else 0))

    def breakdown(self) -> Dict:
        return {
            "found_winning_side": self.found_winning_side(),
            "eval_points": self.eval_points(),
            "found_best_move": self.found_best_move(),
            "best_move_multiplier": self.best_move_multiplier(),
            "found_player_or_tournament": self.found_player_or_tournament(),
            "total_points": self.total_points(),
        }
