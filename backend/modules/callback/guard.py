"""
Generation guard for overlapping sign-in handling.

The callback page and the auth-state listener can both react to the same
sign-in. Each reaction takes a ticket; only the most recent ticket may
navigate, a session is navigated for at most once, and nothing navigates
after the guard is cancelled (the page went away).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FlowTicket:
    session_id: str
    generation: int


class FlowGuard:
    """Monotonic generation counter with a liveness flag."""

    def __init__(self) -> None:
        self._generation = 0
        self._navigated: set[str] = set()
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, session_id: str) -> FlowTicket:
        self._generation += 1
        return FlowTicket(session_id=session_id, generation=self._generation)

    def should_apply(self, ticket: FlowTicket) -> bool:
        return (
            self._alive
            and ticket.generation == self._generation
            and ticket.session_id not in self._navigated
        )

    def mark_navigated(self, ticket: FlowTicket) -> None:
        self._navigated.add(ticket.session_id)

    def cancel(self) -> None:
        self._alive = False
