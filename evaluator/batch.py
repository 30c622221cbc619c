"""
Batch Evaluation
Drives one engine session over a list of positions and collects the reports
"""

import logging
from typing import Callable, List, Optional

from .channel import SearchChannel
from .config import EvaluatorConfig
from .errors import ProtocolError
from .models import PositionReport
from .reader import ResponseReader
from .uci_interface import EngineProcess, EngineSession
from .variation import build_variation, parse_position
from .writer import CommandWriter

logger = logging.getLogger(__name__)


class BatchEvaluator:
    """
    Batch evaluator for one engine session

    Features:
    - Input validated before the engine is spawned
    - Exactly one search in flight at a time
    - Reports in input order, all or nothing
    """

    def __init__(self,
                 config: Optional[EvaluatorConfig] = None,
                 session_factory: Optional[Callable[[], EngineSession]] = None):
        """
        Initialize batch evaluator

        Args:
            config: Protocol constants and engine location
            session_factory: Returns a started session (defaults to spawning
                the configured engine binary)
        """
        self.config = config or EvaluatorConfig()
        self.config.validate()
        self.session_factory = session_factory or self._spawn_engine

    def _spawn_engine(self) -> EngineSession:
        engine_path = self.config.resolve_engine_path()
        return EngineProcess(engine_path).start()

    def evaluate(self, positions: List[str]) -> List[PositionReport]:
        """
        Evaluate every position with the engine

        Args:
            positions: Position notations, in the order to report them

        Returns:
            One PositionReport per position, same order as the input

        Raises:
            InputError: if any position fails to parse (nothing is spawned)
            ProtocolError: if the engine output cannot be accepted
            EngineIOError: if the engine pipes fail
        """
        positions = list(positions)
        for notation in positions:
            parse_position(notation)

        logger.info(f"Evaluating {len(positions)} positions "
                    f"(depth {self.config.depth}, multipv {self.config.multipv})")

        session = self.session_factory()
        try:
            reports = self.run_session(session, positions)
        except BaseException:
            session.terminate()
            raise
        finally:
            session.wait()

        logger.info(f"Batch complete: {len(reports)} reports")
        return reports

    def run_session(self, session: EngineSession, positions: List[str]) -> List[PositionReport]:
        """
        Run the writer and the read/aggregate loop against a started session

        The engine is asked to quit once the last position is read; waiting
        for the process to exit is left to the caller.
        """
        boards = [parse_position(notation) for notation in positions]
        channel = self._make_channel()
        writer = CommandWriter(session, positions, channel, self.config).start()
        reader = ResponseReader(session, self.config)
        reports: List[PositionReport] = []

        try:
            for index, (notation, board) in enumerate(zip(positions, boards)):
                issued = channel.wait_for_search()
                if issued != index:
                    raise RuntimeError(f"Writer issued position {issued}, expected {index}")

                try:
                    triple = reader.read_search()
                except ProtocolError:
                    # a dead writer explains a truncated stream better
                    channel.raise_if_failed()
                    raise

                report = PositionReport(
                    fen=notation,
                    variations=[build_variation(board, fragment) for fragment in triple],
                )
                reports.append(report)
                logger.info(f"Position {index + 1}/{len(positions)}: "
                            f"{len(report.variations)} variations")

                channel.acknowledge(index, report)
        except BaseException:
            channel.close()
            raise

        writer.join()
        channel.raise_if_failed()
        return reports

    def _make_channel(self) -> SearchChannel:
        return SearchChannel()


def evaluate_positions(positions: List[str],
                       config: Optional[EvaluatorConfig] = None) -> List[PositionReport]:
    """
    Convenience function to evaluate a batch of positions

    Args:
        positions: Position notations
        config: Evaluator configuration (defaults if None)

    Returns:
        List of PositionReport in input order
    """
    return BatchEvaluator(config).evaluate(positions)
