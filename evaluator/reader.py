"""
Response Reader
Drains one search's engine output into a VariationTriple
"""

import logging
from typing import Optional

from .config import EvaluatorConfig
from .errors import ProtocolError
from .models import VariationTriple
from .protocol import BestMove, DiagnosticFilter, InfoReport, parse_line, variation_from_info
from .uci_interface import EngineSession

logger = logging.getLogger(__name__)

# Mirror of every raw engine line, kept apart from the driver's own logging
output_logger = logging.getLogger("evaluator.engine_output")


class ResponseReader:
    """
    Per-search state machine over engine output

    Progress lines fill the triple by rank, later reports superseding
    earlier ones. 'bestmove' ends the search.
    """

    def __init__(self, session: EngineSession, config: Optional[EvaluatorConfig] = None):
        self.session = session
        self.config = config or EvaluatorConfig()
        self.diagnostics = DiagnosticFilter(
            self.config.benign_prefixes,
            strict=self.config.strict_diagnostics,
        )
        self.last_bestmove: Optional[BestMove] = None

    def read_search(self) -> VariationTriple:
        """
        Read lines until the terminal 'bestmove' of the current search

        Returns:
            VariationTriple with the ranks the engine reported

        Raises:
            ProtocolError: on a malformed report, an unknown diagnostic, or
                end of output before 'bestmove'
        """
        triple = VariationTriple(self.config.multipv)

        while True:
            line = self.session.read_line()
            if line is None:
                raise ProtocolError("Engine output ended before 'bestmove'")

            if not line.strip():
                continue

            output_logger.info(line)
            message = parse_line(line)

            if isinstance(message, BestMove):
                self.last_bestmove = message
                logger.debug(f"Search finished with {len(triple)} variations, bestmove {message.move}")
                return triple

            if isinstance(message, InfoReport):
                self._apply_info(message, triple)

    def _apply_info(self, info: InfoReport, triple: VariationTriple):
        if info.string is not None:
            self.diagnostics.check(info.string, info.raw)
            return

        fragment = variation_from_info(info, mate_score=self.config.mate_score)
        if fragment is None:
            return

        triple.put(fragment, info.raw)
