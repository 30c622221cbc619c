"""
Result Store
Batch results saved as JSON files under results/
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

from .models import PositionReport, batch_to_dicts

logger = logging.getLogger(__name__)

DEFAULT_RESULTS_DIR = "results"


def save_batch(reports: List[PositionReport], name: str,
               directory: str = DEFAULT_RESULTS_DIR) -> Path:
    """
    Save a batch result

    Args:
        reports: Reports in input order
        name: File stem, saved as <directory>/<name>.json
        directory: Results directory

    Returns:
        Path of the written file
    """
    path = Path(directory) / f"{name}.json"
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(batch_to_dicts(reports), f, indent=2)

    logger.info(f"Batch saved to {path}")
    return path


def load_batch(name: str, directory: str = DEFAULT_RESULTS_DIR) -> List[PositionReport]:
    """Load a saved batch; raises FileNotFoundError if it does not exist"""
    path = Path(directory) / f"{name}.json"
    with open(path) as f:
        data = json.load(f)
    return [PositionReport.from_dict(item) for item in data]


def list_batches(directory: str = DEFAULT_RESULTS_DIR) -> List[Dict]:
    """Describe every saved batch, newest first"""
    results_dir = Path(directory)
    if not results_dir.exists():
        return []

    files = []
    for file_path in results_dir.glob("*.json"):
        stat = file_path.stat()
        files.append({
            "name": file_path.stem,
            "path": str(file_path),
            "size": stat.st_size,
            "modified": stat.st_mtime,
        })

    files.sort(key=lambda item: item["modified"], reverse=True)
    return files
