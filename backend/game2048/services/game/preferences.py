"""Client-side preferences that survive between games.

Only two keys exist. Both are hints: the player name pre-fills the
submission prompt and the best score seeds ``GameSession.best_score``.
Neither is trusted by the score ledger.
"""

import json
import os

PLAYER_NAME = 'playerName'
BEST_SCORE = 'bestScore'
KEYS = (PLAYER_NAME, BEST_SCORE)


class MemoryPreferenceStore:
    def __init__(self, initial=None):
        self._values = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key, default=None):
        self._check(key)
        return self._values.get(key, default)

    def set(self, key, value):
        self._check(key)
        self._values[key] = value

    def _check(self, key):
        if key not in KEYS:
            raise KeyError(f"Unknown preference key: {key}")


class JsonFilePreferenceStore(MemoryPreferenceStore):
    """Preferences persisted to a small JSON file, rewritten on every set."""

    def __init__(self, path):
        self.path = path
        super().__init__(self._load())

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding='utf-8') as fh:
                raw = json.load(fh)
        except (OSError, ValueError):
            return {}
        if not isinstance(raw, dict):
            return {}
        return {k: v for k, v in raw.items() if k in KEYS}

    def set(self, key, value):
        super().set(key, value)
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as fh:
            json.dump(self._values, fh)
