"""JSON config file loading utilities."""

import json
from pathlib import Path
from typing import Any


def load_json(path: Path) -> Any:
    """Load and return parsed JSON from a file."""
    with open(path) as f:
        return json.load(f)
