"""Concurrent read orchestration.

Runs many read requests over a pool of ReadProcessor threads fed from a
bounded queue, and collects their outcomes in submission order.
"""

import logging
import queue
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union, TYPE_CHECKING

from windiris.pipeline.processor import ReadJob, ReadOutcome, ReadProcessor

if TYPE_CHECKING:
    from windiris.pipeline.source import ReadRequest, WindIrisDataSource
    from windiris.schemas import InternalConfig

__all__ = ['ReadOrchestrator', 'configure_logging']

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", log_path: Optional[Union[str, Path]] = None) -> None:
    """Configure root logging with a console handler and optional file handler.

    Existing root handlers are replaced, so repeated calls do not duplicate output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.debug("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_path)


class ReadOrchestrator:
    """Runs read requests concurrently over a pool of worker threads.

    Each request is a self-contained job; workers share only the data source,
    whose reader keeps no per-read state. The number of workers comes from
    ``pipeline.max_workers`` and the queue capacity from ``pipeline.queue_size``.

    Example usage::

        orch = ReadOrchestrator(source)
        outcomes = orch.read(begin, end, requests)
        failed = [o for o in outcomes if not o.ok]

    ``stop()`` may be called from another thread: workers finish the file
    they are decoding and exit; requests that did not complete are reported
    with ``cancelled=True``.
    """

    def __init__(self, source: "WindIrisDataSource", config: Optional["InternalConfig"] = None):
        self.source = source
        self.config = config if config is not None else source.config
        self.max_workers = self.config.pipeline.max_workers
        self.queue_size = self.config.pipeline.queue_size

        self.cancel_event = threading.Event()
        self.workers: list[ReadProcessor] = []

    def _put(self, q: queue.Queue, item) -> bool:
        """Blocking put that gives up once the orchestrator is stopped."""
        while not self.cancel_event.is_set():
            try:
                q.put(item, timeout=0.5)
                return True
            except queue.Full:
                continue
        return False

    def run(self, jobs: Sequence[ReadJob]) -> list[ReadOutcome]:
        """Run ``jobs`` and return one outcome per job, in job order."""
        if not jobs:
            return []

        job_queue: queue.Queue = queue.Queue(maxsize=self.queue_size)
        outcomes: dict[int, ReadOutcome] = {}
        outcome_lock = threading.Lock()

        n_workers = min(self.max_workers, len(jobs))
        self.workers = [
            ReadProcessor(self.source, job_queue, outcomes, outcome_lock,
                          self.cancel_event, name=f"ReadProcessor-{i}")
            for i in range(n_workers)
        ]

        start = time.time()
        logger.info("Reading %d request(s) with %d worker(s)", len(jobs), n_workers)
        for worker in self.workers:
            worker.start()

        for job in jobs:
            if not self._put(job_queue, job):
                break
        for _ in self.workers:
            if not self._put(job_queue, None):
                break

        for worker in self.workers:
            worker.join()

        results = []
        for job in jobs:
            outcome = outcomes.get(job.position)
            if outcome is None:
                outcome = ReadOutcome(job.request, ok=False, cancelled=True)
            results.append(outcome)

        failed = sum(1 for o in results if not o.ok and not o.cancelled)
        logger.info("Read finished in %.1f seconds: %d ok, %d failed, %d cancelled",
                    time.time() - start, sum(1 for o in results if o.ok), failed,
                    sum(1 for o in results if o.cancelled))
        return results

    def read(self, begin: datetime, end: datetime, requests: Sequence["ReadRequest"]) -> list[ReadOutcome]:
        """Read every request for ``[begin, end)``."""
        jobs = [ReadJob(position=i, begin=begin, end=end, request=request)
                for i, request in enumerate(requests)]
        return self.run(jobs)

    def stop(self):
        """Signal all workers to stop. Safe to call multiple times."""
        if self.cancel_event.is_set():
            return
        logger.info("Stopping read workers...")
        self.cancel_event.set()
