"""
clipstack.events
Synchronous, payload-free signal used to announce new clipboard captures.

A receiver that raises is logged and skipped; the remaining receivers still run and
the emitter never sees the exception.
"""

import logging
from typing import Callable, Optional

Receiver = Callable[[], object]


class Signal:
    """
    Named fire-and-forget notification.

    Attributes:
        name (str): Signal name, used in log records.
    """

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.name = name
        self.logger = (logger or logging.getLogger("clipstack")).getChild("Signal")
        self._receivers: list[Receiver] = []
        self.emitted = 0

    def __len__(self) -> int:
        return len(self._receivers)

    def connect(self, receiver: Receiver) -> Receiver:
        """
        Register a receiver. Connecting the same receiver twice has no effect.

        Returns the receiver, so it can be used as a decorator.
        """
        if receiver not in self._receivers:
            self._receivers.append(receiver)
            self.logger.debug(f"Connected receiver to {self.name}")
        return receiver

    def disconnect(self, receiver: Receiver) -> bool:
        """Remove a receiver. Returns False if it was not connected."""
        try:
            self._receivers.remove(receiver)
        except ValueError:
            return False
        return True

    def emit(self) -> None:
        """Call every receiver in connection order."""
        self.emitted += 1
        for receiver in list(self._receivers):
            try:
                receiver()
            except Exception as e:
                self.logger.error(f"Receiver error for signal {self.name}: {e}")

    def __repr__(self) -> str:
        return f"<Signal(name='{self.name}', receivers={len(self._receivers)})>"


__all__ = ["Signal", "Receiver"]
