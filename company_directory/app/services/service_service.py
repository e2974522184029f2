"""
Service layer for services, the company departments workers belong to.
"""

from ..core import messages
from ..schemas.service import ServiceRead
from .base_service import CrudService


class ServiceService(CrudService):
    kind = "service"
    entity_name = "Service"
    read_model = ServiceRead
    natural_key = "name"
    duplicate_message = messages.DUPLICATE_NAME
    dependent_column = "service_id"
