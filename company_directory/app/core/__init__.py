"""
Infrastructure shared by the services: configuration, logging, SQLite
access, the result cache, paged queries and field projection.
"""
