"""Shared machinery: configuration, errors, request building, schemas, transport."""

from harvest_client.core.config import ConfigManager
from harvest_client.core.errors import (
    ConfigurationError,
    DecodeError,
    HarvestError,
    TokenExtractionError,
)
from harvest_client.core.request import Call, RequestDescriptor, build_url, encode_query

__all__ = [
    "ConfigManager",
    "HarvestError",
    "ConfigurationError",
    "DecodeError",
    "TokenExtractionError",
    "Call",
    "RequestDescriptor",
    "build_url",
    "encode_query",
]
