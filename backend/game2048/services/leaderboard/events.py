from typing import Callable, Optional

from flask import current_app

Listener = Callable[[Optional[object]], None]


class LeaderboardEvents:
    """Refresh notifications for leaderboard readers.

    One instance lives on each Flask application. ``subscribe`` returns a
    disposer that removes the listener again.
    """

    def __init__(self, logger=None):
        self._listeners: list[Listener] = []
        self._logger = logger

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def dispose():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return dispose

    def emit(self, payload=None) -> None:
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                if self._logger is not None:
                    self._logger.exception('[events] leaderboard listener failed')

    def __len__(self):
        return len(self._listeners)


def get_leaderboard_events() -> LeaderboardEvents:
    return current_app.extensions['leaderboard_events']
