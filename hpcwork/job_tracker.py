"""Job tracker: hands map and reduce tasks to task trackers and logs progress."""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable

from .jobconfig import Config, Message, MessageType
from .logger import Level, Logger
from .network import JOB_TRACKER_NODE, Network


class JobTracker:
    """Schedule the tasks of one job from node 0.

    Map tasks go to the nodes that ask for them, preferring a chunk stored on
    the asking node.  Reduce tasks are handed out once every map task is done.
    """

    def __init__(self, config: Config, network: Network) -> None:
        if config.nodes < 2:
            raise ValueError(f"a job needs at least two nodes, got {config.nodes}")
        if network.nodes < config.nodes:
            raise ValueError(f"network has {network.nodes} nodes, job needs {config.nodes}")
        self.config = config
        self.network = network
        # chunk ids not yet dispatched
        self._tasks: list[int] = list(range(1, config.num_mappers + 1))
        self._mapper_requests: deque[int] = deque()
        self._reducer_requests: deque[int] = deque()
        self._inflight_mappers = 0
        self._inflight_reducers = 0
        self._working_task_trackers = config.nodes - 1
        self.total_mapper_keys = 0
        self._shuffle_starts = 0
        self._shuffle_ends = 0
        self._cond = threading.Condition()
        self._start = time.monotonic()
        self._shuffle_start = self._start

    def _handle(self, source: int, msg: Message, logger: Logger) -> None:
        config = self.config
        if msg.type is MessageType.MAP:
            self._mapper_requests.append(source)
        elif msg.type is MessageType.REDUCE:
            self._reducer_requests.append(source)
        elif msg.type is MessageType.SHUFFLE:
            self.total_mapper_keys += msg.data
            self._shuffle_starts += 1
            if self._shuffle_starts == config.num_mappers:
                self._shuffle_start = time.monotonic()
                logger.log("Start_Shuffle", self.total_mapper_keys)
        elif msg.type is MessageType.MAP_DONE:
            self._inflight_mappers -= 1
            logger.log("Complete_MapTask", msg.task_id, msg.data)
        elif msg.type is MessageType.SHUFFLE_DONE:
            self._shuffle_ends += 1
            if self._shuffle_ends == config.num_reducers:
                logger.log("Finish_Shuffle", int(time.monotonic() - self._shuffle_start))
        elif msg.type is MessageType.REDUCE_DONE:
            self._inflight_reducers -= 1
            logger.log("Complete_ReduceTask", msg.task_id, msg.data)
        elif msg.type is MessageType.TERMINATE:
            self._working_task_trackers -= 1

    def _serve(self, logger: Logger) -> None:
        while self._working_task_trackers != 0:
            source, msg = self.network.recv(JOB_TRACKER_NODE)
            with self._cond:
                self._handle(source, msg, logger)
                self._cond.notify_all()

    def _next_request(self, requests: deque[int], count_inflight: Callable[[], None]) -> int:
        with self._cond:
            count_inflight()
            self._cond.wait_for(lambda: bool(requests))
            return requests.popleft()

    def _pick_task(self, node_id: int) -> int:
        locality = self.config.locality_config
        task_id = next((t for t in self._tasks if locality.get(t) == node_id), self._tasks[0])
        self._tasks.remove(task_id)
        return task_id

    def _add_mapper(self) -> None:
        self._inflight_mappers += 1

    def _add_reducer(self) -> None:
        self._inflight_reducers += 1

    def run(self) -> None:
        """Run the whole job and return when every task tracker has stopped."""
        config = self.config
        with Logger(config.log_filename(), Level.INFO) as logger:
            logger.log(
                "Start_Job", config.job_name, config.nodes, config.cpus, config.num_reducers,
                config.delay, config.input_filename, config.chunk_size,
                config.locality_config_filename, config.output_dir,
            )
            server = threading.Thread(target=self._serve, args=(logger,), name="job-tracker-server", daemon=True)
            server.start()

            for i in range(1, config.num_mappers + 1):
                node_id = self._next_request(self._mapper_requests, self._add_mapper)
                task_id = self._pick_task(node_id)
                logger.log("Dispatch_MapTask", task_id, i)
                self.network.send(JOB_TRACKER_NODE, node_id, Message(MessageType.MAP, i, task_id))

            with self._cond:
                self._cond.wait_for(lambda: self._inflight_mappers <= 0)

            for task_id in range(config.num_reducers):
                node_id = self._next_request(self._reducer_requests, self._add_reducer)
                logger.log("Dispatch_ReduceTask", task_id, task_id + 1)
                self.network.send(JOB_TRACKER_NODE, node_id, Message(MessageType.REDUCE, task_id + 1, task_id))

            with self._cond:
                self._cond.wait_for(lambda: self._inflight_reducers <= 0)

            for node in range(1, config.nodes):
                self.network.send(JOB_TRACKER_NODE, node, Message(MessageType.TERMINATE))

            server.join()
            logger.log("Finish_Job", int(time.monotonic() - self._start))