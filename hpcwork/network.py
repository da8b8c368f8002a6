"""In-process point-to-point message passing between the nodes of a job."""

from __future__ import annotations

import queue

from .jobconfig import Message

JOB_TRACKER_NODE = 0


class Network:
    """Deliver messages between ``nodes`` numbered nodes.

    Every node has one inbox.  Messages from one sender to one receiver
    arrive in the order they were sent.  ``recv`` blocks until a message
    is there.
    """

    def __init__(self, nodes: int) -> None:
        if nodes <= 0:
            raise ValueError(f"nodes must be positive, got {nodes}")
        self.nodes = nodes
        self._inboxes: list[queue.Queue[tuple[int, Message]]] = [queue.Queue() for _ in range(nodes)]

    def _check(self, node: int) -> None:
        if not 0 <= node < self.nodes:
            raise ValueError(f"node {node} outside 0..{self.nodes - 1}")

    def send(self, source: int, dest: int, message: Message) -> None:
        """Put ``message`` from ``source`` into the inbox of ``dest``."""
        self._check(source)
        self._check(dest)
        self._inboxes[dest].put((source, message))

    def recv(self, node: int) -> tuple[int, Message]:
        """Wait for the next message to ``node``; return ``(source, message)``."""
        self._check(node)
        return self._inboxes[node].get()