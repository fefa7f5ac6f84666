import json
import os
import threading
from datetime import datetime, timezone
from typing import List, Optional

from resumeaid.logger import get_logger
from resumeaid.models.profile import Profile

log = get_logger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ProfileStore:
    """Key-value store of profiles kept in a single JSON array file.

    Records are stored with the same camelCase keys the browser uses, so an
    exported local-storage array can be dropped in as-is.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> List[dict]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, list) else []

    def _write(self, records: List[dict]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
        os.replace(tmp_path, self.path)

    def get_all(self) -> List[Profile]:
        with self._lock:
            return [Profile.model_validate(r) for r in self._read()]

    def get(self, profile_id: str) -> Optional[Profile]:
        with self._lock:
            for record in self._read():
                if record.get("id") == profile_id:
                    return Profile.model_validate(record)
        return None

    def save(self, profile: Profile) -> Profile:
        """Insert or update by id; createdAt is only set on insert."""
        with self._lock:
            records = self._read()
            now = _now_iso()
            index = next((i for i, r in enumerate(records) if r.get("id") == profile.id), -1)
            if index > -1:
                created = records[index].get("createdAt") or profile.created_at or now
                saved = profile.model_copy(update={"updated_at": now, "created_at": created})
                records[index] = saved.to_json_dict()
                log.info("[cyan]Updated profile[/] %s", profile.id)
            else:
                saved = profile.model_copy(update={"updated_at": now, "created_at": now})
                records.append(saved.to_json_dict())
                log.info("[green]Created profile[/] %s", profile.id)
            self._write(records)
        return saved

    def delete(self, profile_id: str) -> bool:
        with self._lock:
            records = self._read()
            remaining = [r for r in records if r.get("id") != profile_id]
            if len(remaining) == len(records):
                return False
            self._write(remaining)
        log.info("[yellow]Deleted profile[/] %s", profile_id)
        return True

    def clear_all(self) -> None:
        with self._lock:
            if os.path.exists(self.path):
                os.remove(self.path)
