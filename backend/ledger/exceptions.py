"""Typed domain exceptions for the ledger.

All domain-level failures use subclasses of LedgerError rather than raw
ValueError, so the HTTP boundary can convert them into responses without
catching unrelated errors.
"""


class LedgerError(Exception):
    """Base exception for ledger rule violations."""


class ScoreConservationError(LedgerError):
    """The four raw scores of a game do not add up to the table total.

    Attributes:
        total: The actual sum of the submitted scores.
        expected: The required table total.

    """

    def __init__(self, total: int, expected: int) -> None:
        self.total = total
        self.expected = expected
        super().__init__(f"Total score must be {expected:,}. Current total: {total:,}")


class IncompleteSelectionError(LedgerError):
    """Not every seat has a selected player and a numeric score.

    Seats are zero-based.
    """

    def __init__(
        self,
        *,
        missing_seats: tuple[int, ...] = (),
        invalid_seats: tuple[int, ...] = (),
        reason: str | None = None,
    ) -> None:
        self.missing_seats = missing_seats
        self.invalid_seats = invalid_seats
        if reason is None:
            parts = []
            if missing_seats:
                parts.append(f"no player selected for seats {list(missing_seats)}")
            if invalid_seats:
                parts.append(f"missing or non-numeric scores for seats {list(invalid_seats)}")
            reason = "; ".join(parts) or "incomplete selection"
        super().__init__(f"Please select all players and enter all scores: {reason}")


class DuplicatePlayerError(LedgerError):
    """The same player was selected in more than one seat."""

    def __init__(self, player_id: str, seats: tuple[int, ...]) -> None:
        self.player_id = player_id
        self.seats = seats
        super().__init__(f"player {player_id} selected in seats {list(seats)}")


class InvalidPlayerNameError(LedgerError):
    """Player name is empty after stripping whitespace."""


class UnknownPlayerError(LedgerError):
    """No player with the given id exists."""


class UnknownGameError(LedgerError):
    """No game with the given id exists."""
