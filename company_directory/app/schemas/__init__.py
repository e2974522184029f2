"""
Pydantic schema definitions for API payloads.

Each entity defines its own create, update and read models; the paged
and existence envelopes live in ``common``.
"""
