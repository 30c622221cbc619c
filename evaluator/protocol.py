"""
UCI Output Parsing
Classifies engine output lines and extracts rank-tagged variation fragments
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

import chess.engine

from .errors import ProtocolError
from .models import RawVariation

logger = logging.getLogger(__name__)

# info keywords followed by a single integer
_INT_FIELDS = {
    "depth", "seldepth", "time", "nodes", "multipv", "currmovenumber",
    "hashfull", "nps", "tbhits", "sbhits", "cpuload",
}

# info keywords whose value runs to the end of the line
_TAIL_FIELDS = {"pv", "string", "refutation", "currline"}


@dataclass
class InfoReport:
    """Parsed 'info' line"""
    raw: str
    multipv: Optional[int] = None
    depth: Optional[int] = None
    score_cp: Optional[int] = None
    score_mate: Optional[int] = None
    bound: Optional[str] = None
    pv: List[str] = field(default_factory=list)
    string: Optional[str] = None
    has_score: bool = False
    has_pv: bool = False

    @property
    def is_variation_report(self) -> bool:
        """True when the line names a rank or moves for a candidate line"""
        return self.multipv is not None or self.has_pv


@dataclass
class BestMove:
    """Parsed 'bestmove' line, the end of one search"""
    raw: str
    move: Optional[str] = None
    ponder: Optional[str] = None


def _parse_int(token: str, name: str, line: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ProtocolError(f"Field '{name}' is not an integer: {token!r}", line) from None


def parse_info(line: str) -> InfoReport:
    """
    Parse a UCI info line

    Args:
        line: Raw line starting with 'info'

    Returns:
        InfoReport with the fields the driver cares about
    """
    info = InfoReport(raw=line)
    tokens = line.split()
    i = 1

    while i < len(tokens):
        key = tokens[i]

        if key in _TAIL_FIELDS:
            rest = tokens[i + 1:]
            if key == "pv":
                info.has_pv = True
                info.pv = rest
            elif key == "string":
                info.string = " ".join(rest)
            break

        if key in _INT_FIELDS:
            if i + 1 >= len(tokens):
                raise ProtocolError(f"Field '{key}' has no value", line)
            value = _parse_int(tokens[i + 1], key, line)
            if key == "multipv":
                info.multipv = value
            elif key == "depth":
                info.depth = value
            i += 2
            continue

        if key == "score":
            info.has_score = True
            i += 1
            while i < len(tokens) and tokens[i] in ("cp", "mate", "lowerbound", "upperbound"):
                kind = tokens[i]
                if kind in ("lowerbound", "upperbound"):
                    info.bound = kind
                    i += 1
                    continue
                if i + 1 >= len(tokens):
                    raise ProtocolError(f"Score '{kind}' has no value", line)
                value = _parse_int(tokens[i + 1], f"score {kind}", line)
                if kind == "cp":
                    info.score_cp = value
                else:
                    info.score_mate = value
                i += 2
            continue

        if key == "wdl":
            i += 4
            continue

        if key == "currmove":
            i += 2
            continue

        # unknown token, skip it
        i += 1

    return info


def parse_bestmove(line: str) -> BestMove:
    """Parse a 'bestmove <move> [ponder <move>]' line"""
    parts = line.split()
    result = BestMove(raw=line)
    if len(parts) >= 2:
        result.move = parts[1]
    if len(parts) >= 4 and parts[2] == "ponder":
        result.ponder = parts[3]
    return result


def parse_line(line: str) -> Optional[Union[InfoReport, BestMove]]:
    """
    Classify one engine output line

    Returns:
        InfoReport, BestMove, or None for lines the driver ignores
        (id, option, uciok, readyok and anything unknown)
    """
    command = line.split(maxsplit=1)[0] if line.strip() else ""
    if command == "info":
        return parse_info(line)
    if command == "bestmove":
        return parse_bestmove(line)
    return None


def variation_from_info(info: InfoReport, mate_score: int = 100000) -> Optional[RawVariation]:
    """
    Turn a variation report into a RawVariation

    Status lines yield None: those without a rank and without moves, such as
    the lone "info depth 0 score mate 0" sent for a mated position. A line
    that reports a variation must carry all of rank, score and first move.

    Raises:
        ProtocolError: if a required field is missing
    """
    if not info.is_variation_report:
        return None

    if info.multipv is None:
        raise ProtocolError("Variation report without 'multipv' rank", info.raw)

    if info.score_cp is not None:
        score = info.score_cp
    elif info.score_mate is not None:
        score = chess.engine.Mate(info.score_mate).score(mate_score=mate_score)
    else:
        raise ProtocolError("Variation report without a score", info.raw)

    if not info.pv:
        raise ProtocolError("Variation report without a principal variation", info.raw)

    return RawVariation(
        rank=info.multipv,
        score=score,
        move=info.pv[0],
        mate=info.score_mate,
    )


class DiagnosticFilter:
    """
    Allow-list for free-text 'info string' diagnostics

    Args:
        prefixes: Diagnostic prefixes that are known to be harmless
        strict: Raise on an unknown diagnostic instead of logging a warning
    """

    def __init__(self, prefixes: Iterable[str] = ("NNUE",), strict: bool = True):
        self.prefixes = tuple(prefixes)
        self.strict = strict

    def check(self, text: str, line: Optional[str] = None):
        if text.startswith(self.prefixes):
            return

        if self.strict:
            raise ProtocolError(f"Unexpected engine diagnostic: {text!r}", line)

        logger.warning(f"Ignoring unexpected engine diagnostic: {text}")
