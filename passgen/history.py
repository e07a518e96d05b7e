"""Recently generated passwords, newest first."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

HISTORY_KEY = "passgen-history"
HISTORY_LIMIT = 10


@dataclass(frozen=True)
class History:
    entries: tuple[str, ...] = ()
    limit: int = HISTORY_LIMIT

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __contains__(self, item) -> bool:
        return item in self.entries

    def add(self, password: str) -> "History":
        """Return a history with *password* at the front.

        Strings already present are not moved or re-inserted.
        """
        if password in self.entries:
            return self
        return History((password, *self.entries)[: self.limit], self.limit)

    def clear(self) -> "History":
        return History((), self.limit)

    # ── Serialisation ──

    def to_json(self) -> str:
        return json.dumps(list(self.entries))

    @classmethod
    def from_json(cls, text: str, limit: int = HISTORY_LIMIT) -> "History":
        """Parse a JSON list of strings, keeping the first *limit* unique ones."""
        data = json.loads(text)
        if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
            raise ValueError("history must be a JSON list of strings")
        return cls(tuple(dict.fromkeys(data))[:limit], limit)

    # ── File storage ──

    @classmethod
    def load(cls, path: str | Path, limit: int = HISTORY_LIMIT) -> "History":
        """Read the history stored under ``HISTORY_KEY`` in *path*.

        A missing file is an empty history.  Malformed content raises
        :class:`ValueError`.
        """
        path = Path(path)
        if not path.exists():
            logger.debug("no history file at %s", path)
            return cls((), limit)

        store = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(store, dict):
            raise ValueError(f"{path}: expected a JSON object")
        history = cls.from_json(json.dumps(store.get(HISTORY_KEY, [])), limit)
        logger.debug("loaded %d history entries from %s", len(history), path)
        return history

    def save(self, path: str | Path) -> None:
        """Write the history under ``HISTORY_KEY``, keeping other keys in *path*."""
        path = Path(path)
        store = {}
        if path.exists():
            store = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(store, dict):
                raise ValueError(f"{path}: expected a JSON object")

        store[HISTORY_KEY] = list(self.entries)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(store, indent=2), encoding="utf-8")
        logger.debug("saved %d history entries to %s", len(self), path)
