"""
Local JSON storage used for generation logs.
Plans and questionnaires live in Supabase; see services/plan_storage.py.
"""

import os
import json
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def read_json_file(filepath: Path) -> Optional[Dict[str, Any]]:
    """Read JSON file, return None if not found or invalid"""
    try:
        if not filepath.exists():
            return None
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {filepath}: {e}")
        return None
    except OSError as e:
        logger.error(f"Error reading {filepath}: {e}")
        return None


def write_json_file(filepath: Path, data: Dict[str, Any]) -> bool:
    """Write data to JSON file atomically"""
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        # Unique temp file per write
        with tempfile.NamedTemporaryFile(
            'w', encoding='utf-8', dir=filepath.parent, suffix='.tmp', delete=False
        ) as f:
            json.dump(data, f, indent=2, default=str)
            temp_name = f.name
        os.replace(temp_name, filepath)
        return True
    except OSError as e:
        logger.error(f"Error writing {filepath}: {e}")
        return False


def append_to_json_list(filepath: Path, item: Dict[str, Any]) -> bool:
    """Append item to JSON list file (creates if not exists)"""
    data = read_json_file(filepath) or {"items": []}
    if "items" not in data:
        data["items"] = []
    data["items"].append(item)
    return write_json_file(filepath, data)


class GenerationLogger:
    """Log plan generation attempts for debugging and provider tracking.

    Disabled when constructed without a path.
    """

    def __init__(self, log_file: Optional[str] = None):
        self.log_file = Path(log_file) if log_file else None
        # Plan generation runs in worker threads
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.log_file is not None

    def log_generation(self, log_entry: Dict[str, Any]) -> bool:
        """Log a generation attempt"""
        if not self.enabled:
            return False
        log_entry["timestamp"] = datetime.now(timezone.utc).isoformat()
        with self._lock:
            return append_to_json_list(self.log_file, log_entry)
