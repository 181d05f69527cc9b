from __future__ import annotations

from vaul.app.feedback_scheduler import FeedbackScheduler


class _FakeTk:
    """Stand-in for ``after``/``after_cancel`` on a Tk widget."""

    def __init__(self) -> None:
        self.timers = {}
        self.cancelled = []
        self._next = 0

    def after(self, delay_ms, callback):
        self._next += 1
        token = f"after#{self._next}"
        self.timers[token] = (delay_ms, callback)
        return token

    def after_cancel(self, token):
        self.cancelled.append(token)
        self.timers.pop(token, None)

    def run(self, token):
        _delay, callback = self.timers.pop(token)
        callback()


def test_schedule_registers_handle_and_fires_once() -> None:
    tk = _FakeTk()
    scheduler = FeedbackScheduler(tk.after, tk.after_cancel)
    fired = []

    scheduler.schedule("1", 2000, lambda: fired.append("1"))
    handle = scheduler.handle_for("1")

    assert handle.token == "after#1"
    assert tk.timers["after#1"][0] == 2000

    tk.run("after#1")

    assert fired == ["1"]
    assert scheduler.handle_for("1") is None


def test_rescheduling_cancels_previous_timer() -> None:
    tk = _FakeTk()
    scheduler = FeedbackScheduler(tk.after, tk.after_cancel)

    scheduler.schedule("1", 2000, lambda: None)
    scheduler.schedule("1", 2000, lambda: None)

    assert tk.cancelled == ["after#1"]
    assert scheduler.handle_for("1").token == "after#2"


def test_stale_fire_does_not_drop_newer_handle() -> None:
    tk = _FakeTk()
    scheduler = FeedbackScheduler(lambda delay, cb: tk.after(delay, cb), lambda token: None)
    first = []

    scheduler.schedule("1", 10, lambda: first.append(1))
    scheduler.schedule("1", 10, lambda: None)
    tk.run("after#1")

    assert first == [1]
    assert scheduler.handle_for("1").token == "after#2"


def test_delay_is_clamped_to_one_ms() -> None:
    tk = _FakeTk()
    scheduler = FeedbackScheduler(tk.after, tk.after_cancel)

    scheduler.schedule("1", 0, lambda: None)

    assert tk.timers["after#1"][0] == 1


def test_cancel_all_and_tolerates_cancel_errors() -> None:
    tk = _FakeTk()

    def _cancel(token):
        tk.cancelled.append(token)
        raise RuntimeError("invalid command name")

    scheduler = FeedbackScheduler(tk.after, _cancel)
    scheduler.schedule("1", 100, lambda: None)
    scheduler.schedule("2", 100, lambda: None)

    scheduler.cancel_all()

    assert sorted(tk.cancelled) == ["after#1", "after#2"]
    assert scheduler.handle_for("1") is None
    assert scheduler.handle_for("2") is None
