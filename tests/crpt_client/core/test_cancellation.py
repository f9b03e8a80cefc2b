from __future__ import annotations

from crpt_client.core.domain.cancellation import CancellationToken


def test_cancel_sets_flag_and_runs_callbacks_once():
    calls: list[str] = []
    token = CancellationToken()
    token.add_callback(lambda: calls.append("a"))

    assert not token.cancelled
    token.cancel()
    token.cancel()

    assert token.cancelled
    assert calls == ["a"]


def test_removed_callback_is_not_called():
    calls: list[str] = []

    def cb():
        calls.append("x")

    token = CancellationToken()
    token.add_callback(cb)
    token.remove_callback(cb)
    token.remove_callback(cb)  # removing twice is harmless
    token.cancel()

    assert calls == []
