"""Job configuration, key/value records and tracker messages of the MapReduce job."""

from __future__ import annotations

import zlib
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

MESSAGE_SIZE = 4


@dataclass
class Config:
    """Settings of one MapReduce job plus the chunk locality loaded from its file.

    ``nodes`` counts every node: one acts as the job tracker, the rest as task
    trackers.  Each line of the locality file holds ``chunk_id node_id``; a node
    id beyond the number of task trackers is wrapped onto them.  Loading stops
    at the first pair that is not two integers.
    """

    nodes: int
    cpus: int
    job_name: str
    num_reducers: int
    delay: int
    input_filename: str
    chunk_size: int
    locality_config_filename: str
    output_dir: str
    num_mappers: int = field(init=False, default=0)
    locality_config: dict[int, int] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        tokens = Path(self.locality_config_filename).read_text().split()
        workers = self.nodes - 1
        for task_token, node_token in zip(tokens[0::2], tokens[1::2]):
            try:
                task_id, node_id = int(task_token), int(node_token)
            except ValueError:
                break
            if workers > 0:
                node_id %= workers
                if node_id == 0:
                    node_id = workers
            # The first entry for a chunk wins, but every line is a mapper task.
            self.locality_config.setdefault(task_id, node_id)
            self.num_mappers += 1

    def log_filename(self) -> str:
        return f"{self.output_dir}{self.job_name}-log.out"

    def mapper_out_filename(self, task_id: int) -> str:
        return f"{self.output_dir}{self.job_name}-{task_id}.temp"

    def reducer_out_filename(self, task_id: int) -> str:
        return f"{self.output_dir}{self.job_name}-{task_id}.out"


@dataclass(frozen=True)
class KV:
    """A key with an integer value, ordered by key alone."""

    key: str
    value: int

    @property
    def hash_code(self) -> int:
        return zlib.crc32(self.key.encode("utf-8"))

    def partition(self, modulus: int) -> int:
        """Return the partition (``0 .. modulus - 1``) the key belongs to."""
        if modulus <= 0:
            raise ValueError(f"modulus must be positive, got {modulus}")
        return self.hash_code % modulus

    def __lt__(self, other: KV) -> bool:
        if not isinstance(other, KV):
            return NotImplemented
        return self.key < other.key


@dataclass
class KVs:
    """A key with every value collected for it."""

    key: str
    values: list[int] = field(default_factory=list)


class MessageType(IntEnum):
    MAP = 0
    SHUFFLE = 1
    REDUCE = 2
    MAP_DONE = 3
    SHUFFLE_DONE = 4
    REDUCE_DONE = 5
    TERMINATE = 6


@dataclass(frozen=True)
class Message:
    """A message between the job tracker and a task tracker.

    ``id`` is the mapper or reducer id, ``task_id`` the chunk id of a mapper or
    the partition id of a reducer, and ``data`` an extra value carried along.
    """

    type: MessageType
    id: int = 0
    task_id: int = 0
    data: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", MessageType(self.type))