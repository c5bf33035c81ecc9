"""Unique identifiers for transactions and payment methods.

Ids and tokens are cut from a buffer of random hex that is refilled in
batches from ``os.urandom``::

    ids = IdGenerator()
    ids.next_id()       # 'f3a91c0d'
    ids.next_token()    # '5b1e...' (32 hex chars)

Callers must treat both as opaque strings.
"""

from __future__ import annotations

import os
import threading
from typing import Callable

ID_LENGTH = 8
TOKEN_LENGTH = 32


class IdGenerator:
    """Allocate ids and tokens that never repeat for the generator's lifetime.

    One generator is shared by a gateway's registry and vault, so allocation
    holds its own lock.

    Parameters
    ----------
    batch_size : int
        Number of 16-byte draws fetched from the entropy source per refill.
    entropy : Callable[[int], bytes]
        Source of random bytes. Defaults to ``os.urandom``.
    """

    def __init__(self, batch_size: int = 256, entropy: Callable[[int], bytes] = os.urandom) -> None:
        self._lock = threading.Lock()
        self._batch_size = batch_size
        self._entropy = entropy
        self._buffer = ""
        self._offset = 0
        self._issued: set[str] = set()

    def next_id(self) -> str:
        """Return a short transaction id not handed out before."""
        return self._unique(ID_LENGTH)

    def next_token(self) -> str:
        """Return a payment method token not handed out before."""
        return self._unique(TOKEN_LENGTH)

    def _unique(self, length: int) -> str:
        with self._lock:
            value = self._draw(length)
            while value in self._issued:
                value = self._draw(length)
            self._issued.add(value)
            return value

    def _draw(self, length: int) -> str:
        # Caller holds the lock
        if self._offset + length > len(self._buffer):
            self._buffer = self._buffer[self._offset :] + self._entropy(16 * self._batch_size).hex()
            self._offset = 0
        value = self._buffer[self._offset : self._offset + length]
        self._offset += length
        return value
