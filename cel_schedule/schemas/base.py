"""
Base Schema
Shared configuration for camelCase JSON payloads.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
