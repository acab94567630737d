"""Tests for the flow generation guard."""

from modules.callback.guard import FlowGuard


class TestFlowGuard:
    def test_latest_ticket_applies(self):
        guard = FlowGuard()
        ticket = guard.begin("user-123")
        assert guard.should_apply(ticket) is True
        assert guard.generation == 1

    def test_superseded_ticket_is_stale(self):
        guard = FlowGuard()
        older = guard.begin("user-123")
        newer = guard.begin("user-123")
        assert guard.should_apply(older) is False
        assert guard.should_apply(newer) is True

    def test_navigated_session_is_not_applied_again(self):
        guard = FlowGuard()
        ticket = guard.begin("user-123")
        guard.mark_navigated(ticket)

        again = guard.begin("user-123")
        other = guard.begin("user-456")

        assert guard.should_apply(again) is False
        assert guard.should_apply(other) is True

    def test_cancel(self):
        guard = FlowGuard()
        ticket = guard.begin("user-123")
        guard.cancel()
        assert guard.alive is False
        assert guard.should_apply(ticket) is False
