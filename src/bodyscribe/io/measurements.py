"""Loading Measurement Sets from JSON files."""
import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)


def load_measurements_json(json_path: str) -> Dict[str, Any]:
    """
    Load a Measurement Set from a JSON object of field name -> value.

    Args:
        json_path: Path to the JSON file.

    Returns:
        The Measurement Set; values are kept as written (strings or numbers).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not valid JSON or not a JSON object.
    """
    if not os.path.exists(json_path):
        raise FileNotFoundError(f"Measurement file not found: {json_path}")

    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Measurement file '{json_path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Measurement file must contain a JSON object, got {type(data).__name__}")

    logger.info(f"Loaded {len(data)} measurements from: {json_path}")
    return data
