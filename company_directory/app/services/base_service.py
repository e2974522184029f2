"""
Generic CRUD logic shared by the location, service and worker services.

``CrudService`` composes the paged query executor, the field projector
and the result cache.  Subclasses declare the entity they manage
(cache namespace, read model, natural key, dependent rows) and supply
field validation; foreign key checks hook in through
``check_references``.

Caching rules:

* list queries are cached under the kind's list namespace, keyed on
  every query parameter;
* single records are cached in full under ``<kind>:item:<id>`` and the
  field projection is applied after the cache read;
* every write removes the record's item key and sweeps the list
  namespace.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel

from ..core import messages
from ..core.cache import ResultCache, build_item_key, build_list_key, list_namespace
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.formats import is_valid_name
from ..core.projection import FieldProjector
from ..core.query import PagedQueryExecutor
from ..core.repository import SqliteRepository

logger = logging.getLogger(__name__)


class CrudService:
    """Base service for one directory entity kind."""

    kind: str = ""
    entity_name: str = ""
    read_model: Type[BaseModel]
    natural_key: str = ""
    duplicate_message: str = messages.DUPLICATE_NAME
    # Column of the dependents repository pointing at this entity.
    dependent_column: Optional[str] = None

    def __init__(
        self,
        repository: SqliteRepository,
        cache: ResultCache,
        executor: Optional[PagedQueryExecutor] = None,
        dependents: Optional[SqliteRepository] = None,
        cache_ttl: Optional[float] = None,
        default_page_size: int = 10,
    ) -> None:
        self.repository = repository
        self.cache = cache
        self.executor = executor or PagedQueryExecutor()
        self.dependents = dependents
        self.cache_ttl = cache_ttl
        self.default_page_size = default_page_size
        self.projector = FieldProjector(self.read_model)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def validate(self, entity: BaseModel) -> None:
        """Check the natural key is non-empty.  Subclasses extend this."""
        value = getattr(entity, self.natural_key)
        if not is_valid_name(value):
            raise ValidationError(
                messages.INVALID_NAME_FORMAT.format(value=value, field=self.natural_key),
                field=self.natural_key,
                value=value,
            )

    async def check_references(self, entity: BaseModel) -> None:
        """Verify foreign keys of ``entity``.  No-op unless overridden."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def check_id(entity_id: int) -> None:
        if entity_id <= 0:
            raise ValidationError(messages.INVALID_ID, field="id", value=entity_id)

    def _not_found(self, entity_id: int) -> NotFoundError:
        return NotFoundError(
            messages.NOT_FOUND.format(entity=self.entity_name, id=entity_id),
            field="id",
            value=entity_id,
        )

    def _duplicate(self, value: Any) -> ConflictError:
        return ConflictError(
            self.duplicate_message.format(value=value), field=self.natural_key, value=value
        )

    def _integrity_error(self, exc: sqlite3.IntegrityError, entity: BaseModel) -> Exception:
        """Translate a constraint violation that slipped past the pre-checks."""
        if "FOREIGN KEY" in str(exc).upper():
            return NotFoundError(messages.RESOURCE_NOT_FOUND)
        return self._duplicate(getattr(entity, self.natural_key))

    def _to_row(self, entity: BaseModel) -> Dict[str, Any]:
        return entity.model_dump(exclude={"id"})

    def _to_read(self, row: Dict[str, Any]) -> BaseModel:
        return self.read_model.model_validate(row)

    async def _invalidate(self, entity_id: Optional[int] = None) -> None:
        if entity_id is not None:
            await self.cache.remove(build_item_key(self.kind, entity_id))
        await self.cache.remove_by_prefix(list_namespace(self.kind))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def create(self, entity: BaseModel) -> BaseModel:
        """Validate, check uniqueness and references, then insert."""
        self.validate(entity)
        key_value = getattr(entity, self.natural_key)
        if self.repository.exists_ci(self.natural_key, key_value):
            raise self._duplicate(key_value)
        await self.check_references(entity)

        row = self._to_row(entity)
        try:
            new_id = self.repository.insert(row)
        except sqlite3.IntegrityError as exc:
            raise self._integrity_error(exc, entity) from exc
        await self._invalidate()
        logger.info("Created %s %s", self.kind, new_id)
        return self.read_model.model_validate({**row, "id": new_id})

    async def get_filtered(
        self,
        search_term: Optional[str] = None,
        fields: Optional[str] = None,
        page_number: int = 1,
        page_size: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Tuple[List[Any], int]:
        """Return one page of records (or projections) and the total count."""
        if page_size is None:
            page_size = self.default_page_size
        page_size = self.executor.effective_page_size(page_number, page_size)
        self.executor.check_search_term(search_term)
        self.projector.resolve(fields)

        cache_key = build_list_key(self.kind, search_term, fields, page_number, page_size, filters)
        cached = await self.cache.try_get(cache_key)
        if cached is not None:
            return cached

        query = self.repository.query().filter_by(**(filters or {}))
        rows, total_count = await self.executor.execute(query, search_term, page_number, page_size)
        items = self.projector.project([self._to_read(row) for row in rows], fields)
        result = (items, total_count)
        await self.cache.set(cache_key, result, self.cache_ttl)
        return result

    async def load(self, entity_id: int) -> BaseModel:
        """Read a record straight from storage, bypassing the cache."""
        self.check_id(entity_id)
        row = self.repository.find(entity_id)
        if row is None:
            raise self._not_found(entity_id)
        return self._to_read(row)

    async def get_by_id(self, entity_id: int, fields: Optional[str] = None) -> Any:
        """Return the record, or a dict of the requested fields."""
        self.check_id(entity_id)
        names = self.projector.resolve(fields)

        cache_key = build_item_key(self.kind, entity_id)
        record = await self.cache.try_get(cache_key)
        if record is None:
            record = await self.load(entity_id)
            await self.cache.set(cache_key, record, self.cache_ttl)

        if names is None:
            return record
        return self.projector.project_one(record, names)

    async def exists_by_id(self, entity_id: int) -> bool:
        if entity_id is None or entity_id <= 0:
            return False
        return self.repository.exists(entity_id)

    async def exists_by_natural_key(self, value: Optional[str]) -> bool:
        if not is_valid_name(value):
            return False
        return self.repository.exists_ci(self.natural_key, value)

    async def update(self, entity_id: int, entity: BaseModel) -> bool:
        """Replace a record.  ``entity.id`` must equal ``entity_id``."""
        self.check_id(entity_id)
        if entity.id != entity_id:
            raise ValidationError(messages.ID_MISMATCH, field="id", value=entity.id)
        self.validate(entity)
        key_value = getattr(entity, self.natural_key)
        if self.repository.exists_ci(self.natural_key, key_value, exclude_id=entity_id):
            raise self._duplicate(key_value)
        await self.check_references(entity)

        try:
            affected = self.repository.update(entity_id, self._to_row(entity))
        except sqlite3.IntegrityError as exc:
            raise self._integrity_error(exc, entity) from exc
        if not affected:
            # Deleted between the checks and the write.
            raise self._not_found(entity_id)
        await self._invalidate(entity_id)
        logger.info("Updated %s %s", self.kind, entity_id)
        return True

    async def delete(self, entity_id: int) -> bool:
        """Delete a record that no other row depends on."""
        self.check_id(entity_id)
        if self.repository.find(entity_id) is None:
            raise self._not_found(entity_id)
        if self.dependents is not None and self.dependent_column:
            count = self.dependents.count_where(self.dependent_column, entity_id)
            if count:
                raise ConflictError(
                    messages.LINKED_WORKERS_CONFLICT.format(entity=self.kind, count=count),
                    field="id",
                    value=entity_id,
                )

        try:
            deleted = self.repository.delete(entity_id)
        except sqlite3.IntegrityError as exc:
            # A dependent row appeared after the check.
            raise ConflictError(
                messages.LINKED_WORKERS_CONFLICT.format(entity=self.kind, count=1),
                field="id",
                value=entity_id,
            ) from exc
        if not deleted:
            raise self._not_found(entity_id)
        await self._invalidate(entity_id)
        logger.info("Deleted %s %s", self.kind, entity_id)
        return True
