"""
Evaluation Models
Per-position variation records and batch reports
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .errors import ProtocolError


@dataclass(frozen=True)
class RawVariation:
    """One rank-tagged fragment taken from an engine progress line"""
    rank: int
    score: int  # centipawns, mates already mapped to a large value
    move: str  # coordinate notation, e.g. "e2e4" or "e7e8q"
    mate: Optional[int] = None


class VariationTriple:
    """
    Fixed-capacity, rank-indexed collection of RawVariation

    A later fragment for a rank replaces the earlier one. Ranks the engine
    never reported stay absent.
    """

    def __init__(self, size: int = 3):
        if size < 1:
            raise ValueError(f"VariationTriple size must be positive, got {size}")
        self.size = size
        self._slots: Dict[int, RawVariation] = {}

    def put(self, fragment: RawVariation, line: Optional[str] = None):
        """Store a fragment at its rank, superseding any earlier report"""
        if not 1 <= fragment.rank <= self.size:
            raise ProtocolError(
                f"Variation rank {fragment.rank} outside 1..{self.size}",
                line,
            )
        self._slots[fragment.rank] = fragment

    def get(self, rank: int) -> Optional[RawVariation]:
        return self._slots.get(rank)

    def __iter__(self) -> Iterator[RawVariation]:
        """Populated fragments in ascending rank order"""
        for rank in sorted(self._slots):
            yield self._slots[rank]

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        slots = [self._slots.get(rank) for rank in range(1, self.size + 1)]
        return f"VariationTriple({slots!r})"


@dataclass
class Variation:
    """Finalized candidate line: evaluation plus leading move"""
    score: int
    move: str
    san: Optional[str] = None
    mate: Optional[int] = None

    @property
    def evaluation(self) -> float:
        """Score in pawns"""
        return round(self.score / 100, 2)

    def to_dict(self) -> Dict:
        return {
            "score": self.score,
            "evaluation": self.evaluation,
            "move": self.move,
            "san": self.san,
            "mate": self.mate,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Variation":
        return cls(
            score=int(data["score"]),
            move=data["move"],
            san=data.get("san"),
            mate=data.get("mate"),
        )


@dataclass
class PositionReport:
    """Evaluation result for one input position"""
    fen: str
    variations: List[Variation] = field(default_factory=list)

    @property
    def best(self) -> Optional[Variation]:
        return self.variations[0] if self.variations else None

    def to_dict(self) -> Dict:
        return {
            "fen": self.fen,
            "variations": [variation.to_dict() for variation in self.variations],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "PositionReport":
        return cls(
            fen=data["fen"],
            variations=[Variation.from_dict(v) for v in data.get("variations", [])],
        )


def batch_to_dicts(reports: List[PositionReport]) -> List[Dict]:
    """Serialize a batch result in input order"""
    return [report.to_dict() for report in reports]
