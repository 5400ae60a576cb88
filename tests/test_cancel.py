from __future__ import annotations

import signal

import pytest

from png2ico.cancel import CancellationToken, check_cancelled, install_interrupt_handler
from png2ico.errors import ConversionCancelled


def test_token_starts_clear_and_raises_once_cancelled() -> None:
    token = CancellationToken()
    token.raise_if_cancelled()
    check_cancelled(None)

    token.cancel()

    assert token.cancelled
    with pytest.raises(ConversionCancelled, match="cancelled by user"):
        check_cancelled(token)


def test_interrupt_handler_cancels_then_interrupts() -> None:
    original = signal.getsignal(signal.SIGINT)
    token = CancellationToken()
    restore = install_interrupt_handler(token)
    try:
        handler = signal.getsignal(signal.SIGINT)
        handler(signal.SIGINT, None)
        assert token.cancelled

        with pytest.raises(KeyboardInterrupt):
            handler(signal.SIGINT, None)
    finally:
        restore()

    assert signal.getsignal(signal.SIGINT) == original
