"""Weaviate REST and GraphQL client built on httpx."""

from .client import WeaviateClient
from .config import ClientConfig, VectorizerConfig
from .errors import WeaviateError
from .query import build_query

__all__ = [
    "ClientConfig",
    "VectorizerConfig",
    "WeaviateClient",
    "WeaviateError",
    "build_query",
]
