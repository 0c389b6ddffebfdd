"""A FIFO queue whose pending elements are signalled through a file descriptor."""

from __future__ import annotations

import os
from collections import deque
from typing import Any


class EventQueue:
    """FIFO of elements with a pollable file descriptor.

    Every pushed element makes the descriptor readable once more, and every
    popped element consumes one notification. The descriptor can therefore
    be watched with ``select``/``selectors`` to learn that elements wait.
    """

    def __init__(self) -> None:
        self._elements: deque[Any] = deque()
        self._read_fd, self._write_fd = os.pipe()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("operation on a closed queue")

    def push(self, element: Any) -> None:
        """Append ``element`` and signal it on the descriptor."""
        self._check_open()
        self._elements.append(element)
        os.write(self._write_fd, b"\x01")

    def pop(self) -> Any:
        """Remove and return the oldest element.

        Raises IndexError when the queue is empty.
        """
        self._check_open()
        if not self._elements:
            raise IndexError("pop from an empty queue")
        os.read(self._read_fd, 1)
        return self._elements.popleft()

    def fileno(self) -> int:
        """Return the descriptor that is readable while elements are pending."""
        self._check_open()
        return self._read_fd

    def close(self) -> None:
        """Release the descriptors and drop pending elements."""
        if self._closed:
            return
        self._closed = True
        self._elements.clear()
        os.close(self._read_fd)
        os.close(self._write_fd)

    def __len__(self) -> int:
        return len(self._elements)

    def __enter__(self) -> "EventQueue":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()