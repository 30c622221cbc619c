"""
Evaluator Configuration
Protocol constants and engine location, persisted as JSON
"""

import json
import logging
import shutil
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import List, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config/evaluator.json"


@dataclass
class EvaluatorConfig:
    """Engine configuration"""
    engine_path: str = "stockfish"
    threads: int = 8
    hash_mb: int = 1024
    multipv: int = 3
    depth: int = 10
    benign_prefixes: List[str] = field(default_factory=lambda: ["NNUE"])
    strict_diagnostics: bool = True
    mate_score: int = 100000

    def validate(self):
        """Reject values the engine protocol cannot carry"""
        for name in ("threads", "hash_mb", "multipv", "depth", "mate_score"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

        if not isinstance(self.benign_prefixes, list) or not all(
            isinstance(prefix, str) for prefix in self.benign_prefixes
        ):
            raise ConfigError("benign_prefixes must be a list of strings")

        if not isinstance(self.strict_diagnostics, bool):
            raise ConfigError(f"strict_diagnostics must be true or false, got {self.strict_diagnostics!r}")

        if not isinstance(self.engine_path, str) or not self.engine_path:
            raise ConfigError(f"engine_path must be a non-empty string, got {self.engine_path!r}")

    def resolve_engine_path(self) -> Path:
        """
        Locate the engine executable

        Returns:
            Path to an existing executable

        Raises:
            FileNotFoundError: if neither the path nor a PATH lookup finds it
        """
        path = Path(self.engine_path)
        if path.exists():
            return path

        found = shutil.which(self.engine_path)
        if found:
            return Path(found)

        raise FileNotFoundError(f"Engine not found: {self.engine_path}")

    def with_overrides(self, **overrides) -> "EvaluatorConfig":
        """Return a copy with every non-None override applied"""
        data = asdict(self)
        data.update({key: value for key, value in overrides.items() if value is not None})
        config = EvaluatorConfig(**data)
        config.validate()
        return config


def load_config(config_file: Optional[str] = None) -> EvaluatorConfig:
    """
    Load evaluator configuration from a JSON file

    Args:
        config_file: Path to the JSON file (defaults to config/evaluator.json)

    Returns:
        EvaluatorConfig, with defaults when the file does not exist
    """
    path = Path(config_file or DEFAULT_CONFIG_FILE)

    if not path.exists():
        logger.info(f"No evaluator config found at {path}, using defaults")
        return EvaluatorConfig()

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    known = {f.name for f in fields(EvaluatorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    config = EvaluatorConfig(**data)
    config.validate()

    logger.info(f"Loaded evaluator configuration from {path}")
    return config


def save_config(config: EvaluatorConfig, config_file: Optional[str] = None):
    """Save evaluator configuration to a JSON file"""
    path = Path(config_file or DEFAULT_CONFIG_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(asdict(config), f, indent=2)

    logger.info(f"Saved evaluator configuration to {path}")
