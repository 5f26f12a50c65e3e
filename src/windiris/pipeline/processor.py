"""Read worker thread.

Pulls read jobs from a queue and runs each one against the data source.
One job is one self-contained request: its buffers are owned by that job
alone, so workers never share output memory.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from windiris.contracts import ContractViolation

if TYPE_CHECKING:
    from windiris.pipeline.source import ReadRequest, WindIrisDataSource

__all__ = ['ReadJob', 'ReadOutcome', 'ReadProcessor']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadJob:
    """A request and the time range to read it for."""
    position: int
    begin: datetime
    end: datetime
    request: "ReadRequest"


@dataclass
class ReadOutcome:
    """Result of one job: ``ok`` or the error that ended it."""
    request: "ReadRequest"
    ok: bool
    error: Optional[BaseException] = None
    cancelled: bool = False


class ReadProcessor(threading.Thread):
    """Worker thread running read jobs until it receives ``None``.

    Parameters
    ----------
    source : WindIrisDataSource
        Shared data source; its reader holds no per-read state.
    input_queue : queue.Queue
        Jobs to run. ``None`` is the shutdown sentinel.
    outcomes : dict
        Shared map ``position -> ReadOutcome``, written under ``outcome_lock``.
    cancel_event : threading.Event
        Set by the orchestrator to stop all workers.
    """

    def __init__(self, source: "WindIrisDataSource", input_queue: queue.Queue,
                 outcomes: dict, outcome_lock: threading.Lock,
                 cancel_event: threading.Event, name: str = "ReadProcessor"):
        super().__init__(daemon=True, name=name)

        self.source = source
        self.input_queue = input_queue
        self.outcomes = outcomes
        self.outcome_lock = outcome_lock
        self.cancel_event = cancel_event

    def stopped(self) -> bool:
        return self.cancel_event.is_set()

    def process_job(self, job: ReadJob) -> ReadOutcome:
        """Run one job and capture its outcome."""
        resource_id = job.request.resource.id
        try:
            self.source.read(job.begin, job.end, [job.request], cancel_event=self.cancel_event)
        except ContractViolation as e:
            logger.exception("Decoding contract violated while reading %s", resource_id)
            return ReadOutcome(job.request, ok=False, error=e)
        except Exception as e:
            logger.exception("Error reading %s", resource_id)
            return ReadOutcome(job.request, ok=False, error=e)

        if self.stopped():
            return ReadOutcome(job.request, ok=False, cancelled=True)
        return ReadOutcome(job.request, ok=True)

    def run(self):
        """Main worker loop (runs in thread)."""
        logger.debug("%s started", self.name)

        while not self.stopped():
            try:
                job = self.input_queue.get(timeout=1)
            except queue.Empty:
                continue

            try:
                if job is None:
                    break
                outcome = self.process_job(job)
                with self.outcome_lock:
                    self.outcomes[job.position] = outcome
            finally:
                self.input_queue.task_done()

        logger.debug("%s stopped", self.name)
