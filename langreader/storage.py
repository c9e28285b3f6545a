import os
import json
import logging
from typing import Optional


class JsonStore:
    """Named JSON records, one file per record, under a data directory."""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def path_for(self, name: str) -> str:
        return os.path.join(self.data_dir, f"{name}.json")

    def load(self, name: str) -> Optional[dict]:
        """Returns the record, or None when it is missing or unreadable."""
        path = self.path_for(name)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logging.warning(f"Could not read record {name} from {path}: {e}")
            return None

    def save(self, name: str, data: dict):
        os.makedirs(self.data_dir, exist_ok=True)
        path = self.path_for(name)
        tmp = path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except Exception:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        logging.debug(f"Saved record {name} to {path}")

