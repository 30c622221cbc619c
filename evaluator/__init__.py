"""
Chess Position Evaluator
Batch analysis of positions through a UCI engine
"""

__version__ = "1.0.0"
__author__ = "Chess Position Evaluator Contributors"

from .batch import BatchEvaluator, evaluate_positions
from .channel import SearchChannel
from .config import EvaluatorConfig, load_config, save_config
from .errors import ConfigError, EngineIOError, EvaluatorError, InputError, ProtocolError
from .models import PositionReport, RawVariation, Variation, VariationTriple
from .reader import ResponseReader
from .scoring import Answer, PointsSolver
from .uci_interface import EngineProcess
from .writer import CommandWriter

__all__ = [
    'BatchEvaluator',
    'evaluate_positions',
    'SearchChannel',
    'EvaluatorConfig',
    'load_config',
    'save_config',
    'ConfigError',
    'EngineIOError',
    'EvaluatorError',
    'InputError',
    'ProtocolError',
    'PositionReport',
    'RawVariation',
    'Variation',
    'VariationTriple',
    'ResponseReader',
    'Answer',
    'PointsSolver',
    'EngineProcess',
    'CommandWriter',
]
