"""Cooperative cancellation for batch conversions."""

from __future__ import annotations

import logging
import signal
import threading
from typing import Callable, Optional

from png2ico.errors import ConversionCancelled

logger = logging.getLogger(__name__)


class CancellationToken:
    """Flag checked between files; setting it stops the batch at the next file."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ConversionCancelled("Operation cancelled by user")


def install_interrupt_handler(token: CancellationToken) -> Callable[[], None]:
    """Route SIGINT to ``token`` and return a function that restores the old handler.

    The first interrupt only requests cancellation. A second interrupt raises
    :class:`KeyboardInterrupt` in the main thread immediately.
    """

    previous = signal.getsignal(signal.SIGINT)

    def _handle(signum, frame) -> None:
        if token.cancelled:
            raise KeyboardInterrupt
        logger.info("Interrupt received, cancelling after the current file")
        token.cancel()

    signal.signal(signal.SIGINT, _handle)

    def restore() -> None:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)

    return restore


def check_cancelled(token: Optional[CancellationToken]) -> None:
    if token is not None:
        token.raise_if_cancelled()
