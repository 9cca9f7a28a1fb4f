"""Poll and response counters."""

from __future__ import annotations

from .signals import Signal


class PollStatistics:
    """Counts polls sent and valid responses received."""

    def __init__(self) -> None:
        self.number_of_polls_changed = Signal()
        self.valid_responses_changed = Signal()
        self.counters_reset = Signal()
        self._polls = 0
        self._valid_responses = 0

    @property
    def number_of_polls(self) -> int:
        return self._polls

    @property
    def valid_responses(self) -> int:
        return self._valid_responses

    def increase_polls(self) -> None:
        self._polls += 1
        self.number_of_polls_changed.emit(self._polls)

    def increase_valid_responses(self) -> None:
        self._valid_responses += 1
        self.valid_responses_changed.emit(self._valid_responses)

    def reset(self) -> None:
        """Zero both counters and report the new values."""
        self._polls = 0
        self._valid_responses = 0
        self.number_of_polls_changed.emit(self._polls)
        self.valid_responses_changed.emit(self._valid_responses)

    def reset_by_user(self) -> None:
        """Zero both counters and announce that the user asked for it."""
        self.reset()
        self.counters_reset.emit()

    def summary(self) -> tuple[str, str]:
        return (
            f"Number of Polls: {self._polls}",
            f"Valid Slave Responses: {self._valid_responses}",
        )