"""
Variation Builder
Resolves engine coordinate moves against the position they were found in
"""

import logging
from typing import Optional

import chess

from .errors import InputError, ProtocolError
from .models import RawVariation, Variation
from .uci_interface import STARTPOS

logger = logging.getLogger(__name__)


def parse_position(notation: str) -> chess.Board:
    """
    Parse a position notation

    Args:
        notation: FEN string, or 'startpos' for the initial board

    Raises:
        InputError: if the notation is not a valid FEN
    """
    if notation == STARTPOS:
        return chess.Board()

    try:
        return chess.Board(notation)
    except ValueError as e:
        raise InputError(notation, str(e)) from e


def _default_promotion(board: chess.Board, move: chess.Move) -> chess.Move:
    """Pawn moves onto the last rank without a piece letter promote to a queen"""
    if move.promotion is not None:
        return move

    piece = board.piece_at(move.from_square)
    if piece is None or piece.piece_type != chess.PAWN:
        return move

    last_rank = 7 if piece.color == chess.WHITE else 0
    if chess.square_rank(move.to_square) == last_rank:
        return chess.Move(move.from_square, move.to_square, promotion=chess.QUEEN)
    return move


def _san(board: chess.Board, move: chess.Move) -> Optional[str]:
    if not board.is_legal(move):
        logger.warning(f"Engine move {move.uci()} is not legal in {board.fen()}")
        return None
    return board.san(move)


def build_variation(board: chess.Board, fragment: RawVariation) -> Variation:
    """
    Finalize a rank-tagged fragment

    Args:
        board: Position the search was run on (not modified)
        fragment: Populated fragment from the reader

    Returns:
        Variation carrying the score and the move in coordinate and SAN form

    Raises:
        ProtocolError: if the move is not valid coordinate notation
    """
    try:
        move = chess.Move.from_uci(fragment.move)
    except ValueError as e:
        raise ProtocolError(f"Invalid move {fragment.move!r} for rank {fragment.rank}") from e

    move = _default_promotion(board, move)

    return Variation(
        score=fragment.score,
        move=move.uci(),
        san=_san(board, move),
        mate=fragment.mate,
    )
