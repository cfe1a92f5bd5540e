class GameError(Exception):
    """Base class for errors raised by the board engine and game sessions."""


class BoardFullError(GameError):
    pass


class GameNotOverError(GameError):
    pass


class LedgerError(Exception):
    """Base class for score ledger failures."""


class SubmissionConflictError(LedgerError):
    """A submission kept colliding with concurrent writes for the same player."""
