from __future__ import annotations

"""
Upload Batching Queue.

Coalesces upload requests issued during the same event-loop turn into
rounds. A round runs at most one job per file name; duplicates (and, when
a round size is configured, surplus distinct jobs) move to the next round.
Rounds keep re-triggering until nothing is pending.
"""

import asyncio
import logging
from typing import List, Optional, Set, Tuple

from assetcdn.domain.models import UploadJob

logger = logging.getLogger(__name__)


class UploadBatchQueue:
    """
    Round-based executor for upload jobs.

    Job callbacks report their own outcome (typically through a future held
    by the requester) and must not raise.
    """

    def __init__(self, round_size: int = 0) -> None:
        self._pending: List[UploadJob] = []
        self._scheduled = False
        self._round_size = max(0, int(round_size))
        self._tasks: Set[asyncio.Task] = set()
        self.rounds = 0

    @property
    def scheduled(self) -> bool:
        return self._scheduled

    @property
    def pending(self) -> int:
        return len(self._pending)

    def enqueue(self, job: UploadJob) -> None:
        """Queue a job and schedule a round unless one is already scheduled."""
        self._pending.append(job)
        if not self._scheduled:
            self._schedule()

    def _schedule(self) -> None:
        self._scheduled = True
        task = asyncio.ensure_future(self._run_round())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_round(self) -> None:
        # Let every request issued in the current turn join this round
        await asyncio.sleep(0)

        jobs, self._pending = self._pending, []
        selected, deferred = self._select(jobs)
        self.rounds += 1
        logger.debug(
            f"Upload round {self.rounds}: {len(selected)} selected, {len(deferred)} deferred"
        )

        try:
            await asyncio.gather(*(job.callback() for job in selected))
        finally:
            self._scheduled = False

        for job in deferred:
            self.enqueue(job)

        # Arrivals that raced in while the round was running
        if self._pending and not self._scheduled:
            self._schedule()

    def _select(self, jobs: List[UploadJob]) -> Tuple[List[UploadJob], List[UploadJob]]:
        """Split jobs into this round's work and the next round's work."""
        selected: List[UploadJob] = []
        deferred: List[UploadJob] = []
        seen: Set[str] = set()
        limit: Optional[int] = self._round_size or None

        for job in jobs:
            if job.file_name in seen:
                deferred.append(job)
            elif limit is not None and len(selected) >= limit:
                deferred.append(job)
            else:
                seen.add(job.file_name)
                selected.append(job)

        return selected, deferred
