# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Job polling.

JobPoller repeatedly fetches a job until it reaches a terminal status
(completed, failed, crashed, cancelled) or the maximum wait elapses. Each
fetch goes through the request executor, so every poll has its own
timeout and retry budget.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from .cancellation import CancelToken, OperationCancelled, sleep
from .exceptions import StromboliError
from .executor import invoke_hook
from .observability.collector import MetricsCollector
from .observability.constants import JOB_POLLS_TOTAL
from .types.jobs import JobResponse, JobStatus

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 2000
DEFAULT_MAX_WAIT_MS = 300000

FetchJob = Callable[[str, CancelToken | None], Awaitable[JobResponse]]
StatusChangeCallback = Callable[[JobStatus | str], Awaitable[None] | None]


class JobPoller:
    """
    Polls a job until it finishes.

    Args:
        fetch_job: Coroutine function ``(job_id, cancel) -> JobResponse``
        metrics: Optional collector for poll metrics

    Example:
        >>> poller = JobPoller(
        ...     lambda job_id, cancel: client.get_job(job_id, cancel=cancel)
        ... )
        >>> job = await poller.wait_for("job-123", poll_interval_ms=500)
        >>> job.status
        <JobStatus.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        fetch_job: FetchJob,
        metrics: MetricsCollector | None = None,
    ):
        self._fetch_job = fetch_job
        self._metrics = metrics

    async def wait_for(
        self,
        job_id: str,
        *,
        poll_interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
        max_wait_ms: float = DEFAULT_MAX_WAIT_MS,
        on_status_change: StatusChangeCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> JobResponse:
        """
        Wait for ``job_id`` to reach a terminal status.

        Args:
            job_id: Job to wait for
            poll_interval_ms: Delay between polls
            max_wait_ms: Give up once this much time has elapsed
            on_status_change: Called with the new status whenever it changes,
                including the first observed status
            cancel: Optional token that aborts the wait

        Returns:
            The job record with a terminal status

        Raises:
            RequestTimeoutError: The job did not finish within ``max_wait_ms``
            StromboliError: A poll failed after its own retries
        """
        started = time.monotonic()
        last_status: JobStatus | str | None = None

        while True:
            job = await self._fetch_job(job_id, cancel)

            if job.status != last_status:
                logger.debug(f"Job {job_id} status: {last_status} -> {job.status}")
                last_status = job.status
                await invoke_hook(on_status_change, job.status)

            if job.is_terminal:
                self._record("terminal")
                logger.debug(f"Job {job_id} finished with status {job.status}")
                return job

            elapsed_ms = (time.monotonic() - started) * 1000
            if elapsed_ms > max_wait_ms:
                self._record("timeout")
                logger.warning(
                    f"Gave up waiting for job {job_id} after {elapsed_ms:.0f}ms "
                    f"(last status {job.status})"
                )
                raise StromboliError.job_timeout(job_id, max_wait_ms)

            self._record("pending")
            try:
                await sleep(poll_interval_ms, cancel)
            except OperationCancelled:
                raise StromboliError.aborted_error() from None

    def _record(self, outcome: str) -> None:
        if self._metrics is not None:
            self._metrics.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": outcome})


__all__ = [
    "DEFAULT_MAX_WAIT_MS",
    "DEFAULT_POLL_INTERVAL_MS",
    "FetchJob",
    "JobPoller",
    "StatusChangeCallback",
]
