"""
Evaluator Errors
Exception hierarchy raised by the protocol driver
"""


class EvaluatorError(Exception):
    """Base class for every failure that aborts a batch"""


class InputError(EvaluatorError):
    """A position notation could not be parsed"""

    def __init__(self, notation: str, reason: str):
        self.notation = notation
        self.reason = reason
        super().__init__(f"Invalid position '{notation}': {reason}")


class ProtocolError(EvaluatorError):
    """The engine sent something the driver cannot accept"""

    def __init__(self, message: str, line: str = None):
        self.line = line
        if line is not None:
            message = f"{message} (line: {line!r})"
        super().__init__(message)


class EngineIOError(EvaluatorError):
    """Writing to or reading from the engine pipes failed"""


class ConfigError(EvaluatorError):
    """Invalid evaluator configuration"""
