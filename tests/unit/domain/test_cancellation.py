"""Unit tests for CancellationToken."""

from tempauth.domain.models.cancellation import CancellationToken


def test_new_token_is_not_cancelled() -> None:
    token = CancellationToken()
    assert not token.is_cancelled
    assert token.reason is None


def test_cancel_sets_flag_and_reason() -> None:
    token = CancellationToken()

    token.cancel("SIGINT")

    assert token.is_cancelled
    assert token.reason == "SIGINT"


def test_first_reason_wins() -> None:
    token = CancellationToken()

    token.cancel("SIGINT")
    token.cancel("SIGTERM")

    assert token.is_cancelled
    assert token.reason == "SIGINT"
