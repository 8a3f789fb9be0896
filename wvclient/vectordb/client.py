from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, List, Mapping, Sequence

import httpx

from ..exception_handler import BatchErrorLog
from .config import ClientConfig, VectorizerConfig
from .errors import WeaviateError
from .models import (
    BatchDataObject,
    BatchDeleteMatch,
    BatchReference,
    BatchSummary,
    ClassSchema,
    CollectionSchema,
    CollectionUpdate,
    ConsistencyLevel,
    DataObject,
    DataObjectWithVector,
    DeleteOutput,
    Reference,
    WireModel,
    to_wire,
)
from .query import DEFAULT_DISTANCE, DEFAULT_LIMIT, build_query
from .transport import HttpTransport

logger = logging.getLogger("wvclient")

# Class names must start with an upper-case letter.
_INVALID_CLASS_START = re.compile(r"^[0-9a-z]")
CLASS_NAME_PREFIX = "G"


def _consistency_params(consistency_level: ConsistencyLevel | None) -> dict[str, str]:
    params: dict[str, str] = {}
    if consistency_level:
        params["consistency_level"] = consistency_level
    return params


class WeaviateClient:
    """Async wrapper around the Weaviate schema, object, batch and GraphQL endpoints."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._http = HttpTransport(self.config, transport=transport)

    async def __aenter__(self) -> "WeaviateClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def create_class(
        self,
        class_name: str,
        vectorizer: VectorizerConfig | None = None,
    ) -> ClassSchema:
        """Create a class vectorised by the configured module and return its summary."""
        vectorizer = vectorizer or self.config.vectorizer
        class_data = {
            "class": class_name,
            "vectorizer": vectorizer.module,
            "moduleConfig": vectorizer.module_config(),
        }

        response = await self._http.request("POST", "/v1/schema", json=class_data)
        module_config = response.get("moduleConfig") or {}
        module_settings = module_config.get(vectorizer.module) or {}
        return ClassSchema(
            class_name=response["class"],
            module_config=module_config,
            vector_index_type=response.get("vectorIndexType"),
            vectorizer=response.get("vectorizer"),
            model=module_settings.get("model"),
        )

    async def delete_class(self, class_name: str) -> None:
        await self._http.request("DELETE", f"/v1/schema/{class_name}")
        logger.info("Collection %s deleted successfully", class_name)

    async def update_class(self, class_name: str, schema: CollectionUpdate) -> None:
        """Update the mutable settings of an existing class."""
        await self._http.request("PUT", f"/v1/schema/{class_name}", json=schema.to_wire())
        logger.info("Collection %s updated successfully", class_name)

    async def get_class(
        self,
        class_name: str | None = None,
    ) -> CollectionSchema | List[CollectionSchema]:
        """Fetch one class definition, or every class when no name is given."""
        if class_name:
            response = await self._http.request("GET", f"/v1/schema/{class_name}")
            return CollectionSchema.model_validate(response)

        response = await self._http.request("GET", "/v1/schema")
        if isinstance(response, Mapping):
            response = response.get("classes")
        response = response or []
        return [CollectionSchema.model_validate(item) for item in response]

    async def create_object(
        self,
        data_object: DataObject,
        consistency_level: ConsistencyLevel | None = None,
    ) -> Any:
        response = await self._http.request(
            "POST",
            "/v1/objects",
            params=_consistency_params(consistency_level),
            json=data_object.to_wire(),
        )
        logger.info("Object created successfully in class %s", data_object.class_name)
        return response

    async def create_vector(
        self,
        data_object: DataObjectWithVector,
        consistency_level: ConsistencyLevel | None = None,
    ) -> Any:
        """Create an object with a caller-supplied vector instead of a vectoriser."""
        response = await self._http.request(
            "POST",
            "/v1/objects",
            params=_consistency_params(consistency_level),
            json=data_object.to_wire(),
        )
        logger.info(
            "Object with custom vector created successfully in class %s",
            data_object.class_name,
        )
        return response

    async def update_object(
        self,
        class_name: str,
        object_id: str,
        data_object: DataObject,
        consistency_level: ConsistencyLevel | None = None,
    ) -> Any:
        response = await self._http.request(
            "PUT",
            f"/v1/objects/{class_name}/{object_id}",
            params=_consistency_params(consistency_level),
            json=data_object.to_wire(),
        )
        logger.info("Object updated successfully in class %s", class_name)
        return response

    async def patch_object(
        self,
        class_name: str,
        object_id: str,
        data_object: WireModel | Mapping[str, Any],
        consistency_level: ConsistencyLevel | None = None,
    ) -> Any:
        """Merge a partial object into an existing one."""
        response = await self._http.request(
            "PATCH",
            f"/v1/objects/{class_name}/{object_id}",
            params=_consistency_params(consistency_level),
            json=to_wire(data_object),
        )
        logger.info("Object partially updated successfully in class %s", class_name)
        return response

    async def validate_object(self, data_object: DataObject) -> None:
        await self._http.request("POST", "/v1/objects/validate", json=data_object.to_wire())
        logger.info("Object validation successful for class %s", data_object.class_name)

    async def add_reference(
        self,
        class_name: str,
        object_id: str,
        property_name: str,
        reference: Reference,
        consistency_level: ConsistencyLevel | None = None,
    ) -> None:
        await self._http.request(
            "POST",
            self._reference_path(class_name, object_id, property_name),
            params=_consistency_params(consistency_level),
            json=reference.to_wire(),
        )
        logger.info(
            "Reference added successfully to %s in class %s", property_name, class_name
        )

    async def update_reference(
        self,
        class_name: str,
        object_id: str,
        property_name: str,
        references: Sequence[Reference],
        consistency_level: ConsistencyLevel | None = None,
    ) -> None:
        """Replace every reference held by ``property_name``."""
        await self._http.request(
            "PUT",
            self._reference_path(class_name, object_id, property_name),
            params=_consistency_params(consistency_level),
            json=[reference.to_wire() for reference in references],
        )
        logger.info(
            "References updated successfully for %s in class %s", property_name, class_name
        )

    async def delete_reference(
        self,
        class_name: str,
        object_id: str,
        property_name: str,
        reference: Reference,
        consistency_level: ConsistencyLevel | None = None,
    ) -> None:
        await self._http.request(
            "DELETE",
            self._reference_path(class_name, object_id, property_name),
            params=_consistency_params(consistency_level),
            json=reference.to_wire(),
        )
        logger.info(
            "Reference deleted successfully from %s in class %s", property_name, class_name
        )

    async def batch_create_objects(
        self,
        objects: Sequence[BatchDataObject],
        consistency_level: ConsistencyLevel | None = None,
    ) -> List[dict[str, Any]]:
        response = await self._http.request(
            "POST",
            "/v1/batch/objects",
            params=_consistency_params(consistency_level),
            json={"objects": [item.to_wire() for item in objects]},
        )
        logger.info("Batch objects created successfully")
        return response or []

    async def batch_create_references(
        self,
        references: Sequence[BatchReference],
        consistency_level: ConsistencyLevel | None = None,
    ) -> List[dict[str, Any]]:
        response = await self._http.request(
            "POST",
            "/v1/batch/references",
            params=_consistency_params(consistency_level),
            json=[reference.to_wire() for reference in references],
        )
        logger.info("Batch references created successfully")
        return response or []

    async def batch_delete_objects(
        self,
        match: BatchDeleteMatch,
        output: DeleteOutput | None = None,
        dry_run: bool = False,
        consistency_level: ConsistencyLevel | None = None,
    ) -> Any:
        """Delete every object of ``match.class_name`` selected by its ``where`` filter."""
        params = _consistency_params(consistency_level)
        if output:
            params["output"] = output
        if dry_run:
            params["dryRun"] = "true"

        response = await self._http.request(
            "DELETE",
            "/v1/batch/objects",
            params=params,
            json={"match": match.to_wire()},
        )
        logger.info("Batch objects deleted successfully")
        return response

    @staticmethod
    def format_object(item: str | Mapping[str, Any], class_name: str) -> BatchDataObject:
        """Wrap a raw item as a batch object of ``class_name``.

        Strings become ``{"content": item}``. Class names starting with a digit
        or a lower-case letter are prefixed with ``G``.
        """
        if _INVALID_CLASS_START.match(class_name):
            class_name = CLASS_NAME_PREFIX + class_name
        properties = {"content": item} if isinstance(item, str) else dict(item)
        return BatchDataObject(class_name=class_name, properties=properties)

    async def batch_objects(
        self,
        items: Sequence[str | Mapping[str, Any]],
        class_name: str,
        *,
        summary: BatchSummary | None = None,
        error_log: BatchErrorLog | None = None,
    ) -> bool:
        """Submit one batch of raw items. Returns False when the request failed."""
        objects = [self.format_object(item, class_name) for item in items]
        try:
            results = await self.batch_create_objects(objects)
            if not isinstance(results, list):
                raise WeaviateError(
                    None, None, [{"message": f"Unexpected batch response: {results!r}"}]
                )
        except WeaviateError as exc:
            logger.error("Error in batch_objects: %s", exc)
            if error_log is not None:
                error_log.collect_batch_error(exc, class_name, len(objects))
            if summary is not None:
                summary.failed_batches += 1
            return False

        errors = [result for result in results if _object_errors(result)]
        vectorized_count = len(results) - len(errors)

        logger.info("Number of vectorized objects: %d", vectorized_count)
        logger.info("Number of errors: %d", len(errors))
        if errors:
            logger.info("Last error: %s", errors[-1])

        if error_log is not None:
            for result in errors:
                error_log.collect_object_error(result, class_name)
        if summary is not None:
            summary.vectorized += vectorized_count
            summary.errors += len(errors)
            if errors:
                summary.last_error = errors[-1]

        return True

    async def store_in_batch(
        self,
        items: Sequence[str | Mapping[str, Any]],
        class_name: str,
        *,
        error_log: BatchErrorLog | None = None,
    ) -> BatchSummary:
        """Upload items in fixed-size batches, pausing between batches for rate limits."""
        batch_size = max(1, self.config.batch_size)
        batches = [items[start : start + batch_size] for start in range(0, len(items), batch_size)]

        summary = BatchSummary(batches=len(batches))
        for index, batch in enumerate(batches):
            logger.info("Processing batch %d of %d.", index + 1, len(batches))
            await self.batch_objects(batch, class_name, summary=summary, error_log=error_log)

            if index < len(batches) - 1:
                logger.info("Waiting for rate limit delay before next batch...")
                await asyncio.sleep(self.config.rate_limit_delay)

        logger.info("All batches processed.")
        return summary

    @staticmethod
    def build_query(
        search_query: str,
        class_name: str,
        fields: Sequence[str],
        *,
        limit: int = DEFAULT_LIMIT,
        distance: float = DEFAULT_DISTANCE,
    ) -> str:
        return build_query(search_query, class_name, fields, limit=limit, distance=distance)

    query = build_query

    async def search(
        self,
        search_query: str,
        class_name: str,
        fields: Sequence[str],
        *,
        limit: int = DEFAULT_LIMIT,
        distance: float = DEFAULT_DISTANCE,
    ) -> List[dict[str, Any]]:
        """Run a ``nearText`` search. Failures are logged and yield an empty list."""
        query = self.build_query(search_query, class_name, fields, limit=limit, distance=distance)
        try:
            response = await self._http.request("POST", "/v1/graphql", json={"query": query})
        except WeaviateError:
            logger.exception("Error fetching index for class %s", class_name)
            return []

        if not isinstance(response, Mapping):
            logger.error("Unexpected GraphQL response for class %s: %r", class_name, response)
            return []
        if response.get("errors"):
            logger.error("GraphQL errors for class %s: %s", class_name, response["errors"])
            return []

        data = response.get("data") or {}
        return (data.get("Get") or {}).get(class_name) or []

    @staticmethod
    def _reference_path(class_name: str, object_id: str, property_name: str) -> str:
        return f"/v1/objects/{class_name}/{object_id}/references/{property_name}"


def _object_errors(result: Any) -> bool:
    if not isinstance(result, Mapping):
        return False
    outcome = result.get("result")
    if not isinstance(outcome, Mapping):
        return False
    errors = outcome.get("errors")
    return isinstance(errors, Mapping) and "error" in errors


__all__ = ["WeaviateClient", "CLASS_NAME_PREFIX"]
