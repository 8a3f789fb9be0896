"""Core package for the Weaviate client tooling."""

from .exception_handler import BatchErrorLog, setup_logging
from .vectordb import ClientConfig, VectorizerConfig, WeaviateClient, WeaviateError, build_query
from .vectordb.models import BatchSummary

__all__ = [
    "BatchErrorLog",
    "BatchSummary",
    "ClientConfig",
    "VectorizerConfig",
    "WeaviateClient",
    "WeaviateError",
    "build_query",
    "setup_logging",
]
