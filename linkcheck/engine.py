"""Bounded worker pool that probes links and fans outcomes into two streams.

Lifecycle of a run
------------------
``IDLE``        — nothing started yet.
``DISPATCHING`` — ``worker_count`` workers are up; links are being queued.
``DRAINING``    — the work queue is closed; workers finish what is queued.
``DONE``        — every worker has exited and both streams are closed.

Workers communicate only through queues: one shared work queue of links and
two outcome streams.  A dedicated closer thread joins the workers and is the
only thing that ever closes the streams.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from enum import Enum
from typing import Callable, Iterator, Sequence

import httpx

from linkcheck.errors import ConfigurationError
from linkcheck.models import Outcome, OutcomeCollection, ProbeConfig, Status
from linkcheck.prober import build_client, probe

logger = logging.getLogger(__name__)

ProbeFn = Callable[[ProbeConfig, str, httpx.Client], Status]

# Marks the end of a queue.  Each reader that sees it puts it back so that
# every other reader sees it too.
_CLOSED = object()


class RunState(str, Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    DRAINING = "draining"
    DONE = "done"


class OutcomeStream:
    """Closable, thread-safe, append-only stream of :class:`Outcome`.

    Iterating blocks until the next outcome arrives and stops once the
    stream is closed and empty.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue = queue.Queue()
        self._closed = threading.Event()
        self._delivered: list[Outcome] = []

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def put(self, outcome: Outcome) -> None:
        if self._closed.is_set():
            raise RuntimeError("cannot write to a closed outcome stream")
        self._queue.put(outcome)

    def close(self) -> None:
        self._closed.set()
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[Outcome]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                self._queue.put(_CLOSED)
                return
            self._delivered.append(item)
            yield item

    def drain(self) -> tuple[Outcome, ...]:
        """Consume what is left and return every outcome delivered so far."""
        for _ in self:
            pass
        return tuple(self._delivered)


class VerificationRun:
    """Handle on an in-flight run returned by :meth:`VerificationEngine.start`."""

    def __init__(self, link_count: int) -> None:
        self.link_count = link_count
        self.state = RunState.IDLE
        self.reachable = OutcomeStream()
        self.unreachable = OutcomeStream()
        self._done = threading.Event()
        self._collected: OutcomeCollection | None = None

    def _finish(self) -> None:
        self.state = RunState.DONE
        self.reachable.close()
        self.unreachable.close()
        self._done.set()
        logger.debug("Run done: %d link(s) classified", self.link_count)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every worker has exited.  Returns ``False`` on timeout."""
        return self._done.wait(timeout)

    def collect(self) -> OutcomeCollection:
        """Wait for the run to finish and return all of its outcomes.

        Outcomes a consumer already read from a stream are included.  The
        result is computed once and returned again on later calls.
        """
        self.wait()
        if self._collected is None:
            self._collected = OutcomeCollection(
                reachable=self.reachable.drain(),
                unreachable=self.unreachable.drain(),
            )
        return self._collected


class VerificationEngine:
    """Probe links with a fixed pool of ``config.worker_count`` threads.

    Args:
        config: Shared probe settings; validated here, before any work starts.
        probe_fn: Callable classifying one link.  Defaults to :func:`probe`.
        client: An ``httpx.Client`` to share between workers.  When omitted
            the engine builds one per run and closes it when the run ends.

    Raises:
        ConfigurationError: If *config* cannot drive a run.
    """

    def __init__(
        self,
        config: ProbeConfig,
        probe_fn: ProbeFn = probe,
        client: httpx.Client | None = None,
    ) -> None:
        if config.worker_count < 1:
            raise ConfigurationError(
                f"worker_count must be at least 1, got {config.worker_count}"
            )
        if config.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {config.timeout}")
        if config.max_redirects < 0:
            raise ConfigurationError(
                f"max_redirects must not be negative, got {config.max_redirects}"
            )
        self.config = config
        self._probe = probe_fn
        self._client = client

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def start(self, links: Sequence[str]) -> VerificationRun:
        """Start probing *links* and return immediately.

        Consumers may iterate ``run.reachable`` / ``run.unreachable`` while
        the workers are still busy.
        """
        run = VerificationRun(len(links))
        if not links:
            run._finish()
            return run

        owns_client = self._client is None
        client = build_client(self.config) if owns_client else self._client
        worker_count = self.config.worker_count
        jobs: queue.Queue = queue.Queue()

        run.state = RunState.DISPATCHING
        logger.debug("Dispatching %d link(s) to %d worker(s)", len(links), worker_count)
        executor = ThreadPoolExecutor(
            max_workers=worker_count, thread_name_prefix="linkcheck-worker"
        )
        workers = [
            executor.submit(self._work, jobs, client, run) for _ in range(worker_count)
        ]
        for link in links:
            jobs.put(link)
        jobs.put(_CLOSED)

        run.state = RunState.DRAINING
        closer = threading.Thread(
            target=self._close_when_done,
            args=(executor, workers, run, client if owns_client else None),
            name="linkcheck-closer",
            daemon=True,
        )
        closer.start()
        return run

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _work(self, jobs: queue.Queue, client: httpx.Client, run: VerificationRun) -> None:
        while True:
            link = jobs.get()
            if link is _CLOSED:
                jobs.put(_CLOSED)
                return
            try:
                status = self._probe(self.config, link, client)
            except Exception:
                logger.exception("Probe crashed for %s; recording it as unreachable", link)
                status = Status.UNREACHABLE
            outcome = Outcome(link=link, status=status)
            if status is Status.REACHABLE:
                run.reachable.put(outcome)
            else:
                run.unreachable.put(outcome)

    def _close_when_done(
        self,
        executor: ThreadPoolExecutor,
        workers: list[Future],
        run: VerificationRun,
        client: httpx.Client | None,
    ) -> None:
        try:
            wait(workers)
            executor.shutdown(wait=True)
            if client is not None:
                client.close()
        finally:
            run._finish()


def verify(
    links: Sequence[str],
    config: ProbeConfig,
    *,
    probe_fn: ProbeFn = probe,
    client: httpx.Client | None = None,
) -> OutcomeCollection:
    """Probe every link and return the fully drained outcomes.

    Raises:
        ConfigurationError: If *config* cannot drive a run.
    """
    engine = VerificationEngine(config, probe_fn=probe_fn, client=client)
    return engine.start(links).collect()
