"""
Service layer for workers.

Workers reference one location and one service.  Besides the shared
CRUD rules the worker service checks every field format (names, e-mail
and both phone numbers), verifies that the referenced location and
service exist, and lets list queries filter on either of them.
"""

import logging
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel

from ..core import messages
from ..core.exceptions import NotFoundError, ValidationError
from ..core.formats import is_valid_email, is_valid_name, is_valid_phone_number
from ..schemas.worker import WorkerRead
from .base_service import CrudService
from .location_service import LocationService
from .service_service import ServiceService

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ("first_name", "last_name", "email", "phone_fixed", "phone_mobile")


class WorkerService(CrudService):
    kind = "worker"
    entity_name = "Worker"
    read_model = WorkerRead
    natural_key = "email"
    duplicate_message = messages.DUPLICATE_EMAIL

    def __init__(
        self,
        repository,
        cache,
        location_service: LocationService,
        service_service: ServiceService,
        **kwargs,
    ) -> None:
        super().__init__(repository, cache, **kwargs)
        self.location_service = location_service
        self.service_service = service_service

    def validate(self, worker: BaseModel) -> None:
        for field in ("first_name", "last_name"):
            value = getattr(worker, field)
            if not is_valid_name(value):
                raise ValidationError(
                    messages.INVALID_NAME_FORMAT.format(value=value, field=field),
                    field=field,
                    value=value,
                )
        if not is_valid_email(worker.email):
            raise ValidationError(
                messages.INVALID_EMAIL_FORMAT.format(value=worker.email, field="email"),
                field="email",
                value=worker.email,
            )
        for field in ("phone_fixed", "phone_mobile"):
            value = getattr(worker, field)
            if not is_valid_phone_number(value):
                raise ValidationError(
                    messages.INVALID_PHONE_FORMAT.format(value=value, field=field),
                    field=field,
                    value=value,
                )

    async def check_references(self, worker: BaseModel) -> None:
        if not await self.service_service.exists_by_id(worker.service_id):
            raise NotFoundError(
                messages.NOT_FOUND.format(entity="Service", id=worker.service_id),
                field="service_id",
                value=worker.service_id,
            )
        if not await self.location_service.exists_by_id(worker.location_id):
            raise NotFoundError(
                messages.NOT_FOUND.format(entity="Location", id=worker.location_id),
                field="location_id",
                value=worker.location_id,
            )

    async def get_filtered(
        self,
        search_term: Optional[str] = None,
        fields: Optional[str] = None,
        page_number: int = 1,
        page_size: Optional[int] = None,
        location_id: Optional[int] = None,
        service_id: Optional[int] = None,
    ) -> Tuple[List[Any], int]:
        """List workers, optionally restricted to a location and/or service."""
        return await super().get_filtered(
            search_term,
            fields,
            page_number,
            page_size,
            filters={"location_id": location_id, "service_id": service_id},
        )
