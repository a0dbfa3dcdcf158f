"""
Pydantic schema definitions for API payloads.

Each domain (price records, accounts, taxonomy) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from the store layout so that the camelCase wire names used
by clients do not leak into SQL column names.
"""
