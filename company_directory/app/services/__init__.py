"""
Service layer.

Each service encapsulates the business rules for one entity kind on top
of the shared ``CrudService``; ``container.build_services`` wires them
to a database and a cache.
"""
