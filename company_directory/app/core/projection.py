"""
Dynamic field selection for API responses.

A ``FieldProjector`` is built once per entity kind from the pydantic
read model.  It maps every declared field to an accessor, so a caller
supplied list such as ``"City"`` or ``"first_name, Email"`` is resolved
against a fixed registry instead of being evaluated dynamically.

Matching ignores case and underscores: ``FirstName``, ``firstname`` and
``first_name`` all select the ``first_name`` field.  Projected items are
plain dicts keyed by the model's field names in alphabetical order.
Fields whose value is ``None`` are left out, so a caller cannot tell an
absent value from a null one.
"""

import operator
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel

from .exceptions import ValidationError
from . import messages


def _normalise(name: str) -> str:
    return name.replace("_", "").lower()


class FieldProjector:
    """Field registry and projector for one pydantic model."""

    def __init__(self, model: Type[BaseModel]) -> None:
        self.model = model
        self._accessors: Dict[str, Callable[[Any], Any]] = {}
        self._lookup: Dict[str, str] = {}
        for name in model.model_fields:
            key = _normalise(name)
            if key in self._lookup:
                raise ValueError(
                    f"Fields '{self._lookup[key]}' and '{name}' of {model.__name__} are ambiguous"
                )
            self._lookup[key] = name
            self._accessors[name] = operator.attrgetter(name)
        if not self._accessors:
            raise ValueError(f"{model.__name__} declares no fields")

    @property
    def field_names(self) -> List[str]:
        return sorted(self._accessors)

    def resolve(self, fields: Optional[str]) -> Optional[List[str]]:
        """Validate a comma separated field list.

        Returns ``None`` when no projection was requested, otherwise the
        matched field names in alphabetical order.  Raises
        ``ValidationError`` naming every unknown field.
        """
        if fields is None or not fields.strip():
            return None
        requested = [name.strip() for name in fields.split(",") if name.strip()]
        if not requested:
            raise ValidationError(messages.NO_FIELDS, field="fields", value=fields)
        invalid = [name for name in requested if _normalise(name) not in self._lookup]
        if invalid:
            raise ValidationError(
                messages.INVALID_FIELD_NAME.format(fields=", ".join(invalid)),
                field="fields",
                value=fields,
            )
        return sorted({self._lookup[_normalise(name)] for name in requested})

    def project_one(self, item: Any, names: List[str]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for name in names:
            value = self._accessors[name](item)
            if value is not None:
                result[name] = value
        return result

    def project(self, items: Iterable[Any], fields: Optional[str]) -> List[Any]:
        """Return the items unchanged, or reduced to the requested fields."""
        names = self.resolve(fields)
        if names is None:
            return list(items)
        return [self.project_one(item, names) for item in items]
