"""
Service layer for locations.

A location is identified by its city.  Cities are unique regardless of
case and a location cannot be deleted while workers are attached to it.
"""

from ..core import messages
from ..schemas.location import LocationRead
from .base_service import CrudService


class LocationService(CrudService):
    kind = "location"
    entity_name = "Location"
    read_model = LocationRead
    natural_key = "city"
    duplicate_message = messages.DUPLICATE_NAME
    dependent_column = "location_id"
