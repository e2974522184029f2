"""
Batch reassignment of workers to a new location and/or service.

Workers are processed one at a time in the order given.  Each worker is
read fresh from storage, its target fields replaced, then validated and
saved through ``WorkerService.update`` so the usual format, reference
and uniqueness rules (and cache invalidation) apply.

In strict mode (``allow_partial=False``) the first failure is raised
as is.  Workers saved before the failure stay saved: there is no
rollback across the batch.  In partial mode expected failures are
recorded per worker and the batch carries on.

The whole batch shares one deadline.  Running out of time raises
``TransferTimeoutError`` in both modes; the workers already saved stay
saved.
"""

import asyncio
import logging
from typing import Iterable, List, Optional

from ..core import messages
from ..core.exceptions import DirectoryError, TransferTimeoutError, ValidationError
from ..schemas.worker import TransferErrorDetail, TransferResult, WorkerUpdate
from .worker_service import WorkerService

logger = logging.getLogger(__name__)


class WorkerTransferService:
    """Moves batches of workers between locations and services."""

    def __init__(self, worker_service: WorkerService, timeout: Optional[float] = None) -> None:
        self.workers = worker_service
        self.timeout = timeout

    async def _transfer_one(
        self,
        worker_id: int,
        new_location_id: Optional[int],
        new_service_id: Optional[int],
    ) -> None:
        current = await self.workers.load(worker_id)
        changes = {}
        if new_location_id is not None:
            changes["location_id"] = new_location_id
        if new_service_id is not None:
            changes["service_id"] = new_service_id
        updated = WorkerUpdate.model_validate({**current.model_dump(), **changes})
        await self.workers.update(worker_id, updated)

    def _timed_out(self, limit: float, processed: int) -> TransferTimeoutError:
        logger.error("Worker transfer timed out after %s worker(s)", processed)
        return TransferTimeoutError(
            messages.TRANSFER_TIMEOUT.format(timeout=limit, processed=processed),
            processed=processed,
        )

    async def transfer(
        self,
        worker_ids: Iterable[int],
        new_location_id: Optional[int] = None,
        new_service_id: Optional[int] = None,
        allow_partial: bool = False,
        timeout: Optional[float] = None,
    ) -> TransferResult:
        """Reassign ``worker_ids`` and report how many succeeded.

        ``timeout`` overrides the service default for this call only.
        """
        worker_ids = list(worker_ids)
        if not worker_ids:
            raise ValidationError(messages.TRANSFER_EMPTY, field="worker_ids", value=worker_ids)
        if self.workers.repository.count_existing(worker_ids) == 0:
            raise ValidationError(messages.RESOURCE_NOT_FOUND, field="worker_ids", value=worker_ids)

        limit = timeout if timeout is not None else self.timeout
        loop = asyncio.get_running_loop()
        deadline = loop.time() + limit if limit else None

        logger.info(
            "Transferring %s worker(s) to location=%s service=%s (partial=%s)",
            len(worker_ids), new_location_id, new_service_id, allow_partial,
        )
        success_count = 0
        errors: List[TransferErrorDetail] = []
        for index, worker_id in enumerate(worker_ids):
            step = self._transfer_one(worker_id, new_location_id, new_service_id)
            try:
                if deadline is None:
                    await step
                else:
                    remaining = deadline - loop.time()
                    if remaining <= 0:
                        step.close()
                        raise self._timed_out(limit, index)
                    await asyncio.wait_for(step, timeout=remaining)
            except TransferTimeoutError:
                raise
            except asyncio.TimeoutError as exc:
                raise self._timed_out(limit, index) from exc
            except DirectoryError as exc:
                if not allow_partial:
                    logger.warning("Transfer of worker %s failed, aborting: %s", worker_id, exc)
                    raise
                logger.warning("Transfer of worker %s failed: %s", worker_id, exc)
                errors.append(TransferErrorDetail(worker_id=worker_id, message=str(exc)))
                continue
            success_count += 1

        result = TransferResult(
            total_workers=len(worker_ids),
            success_count=success_count,
            errors=errors,
        )
        logger.info(
            "Transfer finished: %s succeeded, %s failed",
            result.success_count, result.failed_count,
        )
        return result
