"""Wire-format records exchanged with the Weaviate REST API.

The remote service owns these schemas; the models only give them names and
camelCase aliases. Unknown keys are kept so records round-trip verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ConsistencyLevel = Literal["ONE", "QUORUM", "ALL"]
DeleteOutput = Literal["minimal", "verbose"]


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        protected_namespaces=(),
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ClassSchema(WireModel):
    """Summary of a class returned by class creation."""

    class_name: str = Field(alias="class")
    module_config: dict[str, Any] | None = None
    model: str | None = None
    vector_index_type: str | None = None
    vectorizer: str | None = None


class DataObject(WireModel):
    class_name: str = Field(alias="class")
    properties: dict[str, Any] = Field(default_factory=dict)
    id: str | None = None
    tenant: str | None = None


class DataObjectWithVector(DataObject):
    vector: List[float]


class BatchDataObject(WireModel):
    class_name: str = Field(alias="class")
    properties: dict[str, Any] = Field(default_factory=dict)
    id: str | None = None
    tenant: str | None = None


class BatchReference(WireModel):
    """Link between a source property beacon and a target object beacon."""

    from_beacon: str = Field(alias="from")
    to: str


class BatchDeleteMatch(WireModel):
    class_name: str = Field(alias="class")
    where: dict[str, Any]


class Reference(WireModel):
    beacon: str


class BM25Config(WireModel):
    b: float | None = None
    k1: float | None = None


class StopwordsConfig(WireModel):
    additions: List[str] | None = None
    preset: str | None = None
    removals: List[str] | None = None


class InvertedIndexConfig(WireModel):
    bm25: BM25Config | None = None
    cleanup_interval_seconds: int | None = None
    stopwords: StopwordsConfig | None = None


class ReplicationConfig(WireModel):
    factor: int | None = None


class CollectionUpdate(WireModel):
    """Mutable class settings.

    Other settings cannot be changed in place; the class has to be deleted,
    re-created with the new settings and its data re-imported.
    """

    class_name: str = Field(alias="class")
    description: str | None = None
    vector_index_config: dict[str, Any] | None = None
    inverted_index_config: InvertedIndexConfig | None = None
    replication_config: ReplicationConfig | None = None


class Text2VecOpenAIConfig(WireModel):
    base_url: str | None = Field(default=None, alias="baseURL")
    model: str | None = None
    model_version: str | None = None
    type: str | None = None
    vectorize_class_name: bool | None = None


class MultiTenancyConfig(WireModel):
    enabled: bool | None = None


class ShardingConfig(WireModel):
    virtual_per_physical: int | None = None
    desired_count: int | None = None
    actual_count: int | None = None
    desired_virtual_count: int | None = None
    actual_virtual_count: int | None = None
    key: str | None = None
    strategy: str | None = None
    function: str | None = None


class PQConfig(WireModel):
    enabled: bool | None = None
    bit_compression: bool | None = None
    segments: int | None = None
    centroids: int | None = None
    training_limit: int | None = None
    encoder: Any = None


class VectorIndexConfig(WireModel):
    skip: bool | None = None
    cleanup_interval_seconds: int | None = None
    max_connections: int | None = None
    ef_construction: int | None = None
    ef: int | None = None
    dynamic_ef_min: int | None = None
    dynamic_ef_max: int | None = None
    dynamic_ef_factor: int | None = None
    vector_cache_max_objects: int | None = None
    flat_search_cutoff: int | None = None
    distance: str | None = None
    pq: PQConfig | None = None


class CollectionSchema(WireModel):
    """Full class definition as reported by the schema endpoint."""

    class_name: str = Field(alias="class")
    description: str | None = None
    inverted_index_config: InvertedIndexConfig | None = None
    module_config: dict[str, Any] | None = None
    multi_tenancy_config: MultiTenancyConfig | None = None
    properties: List[dict[str, Any]] | None = None
    replication_config: ReplicationConfig | None = None
    sharding_config: ShardingConfig | None = None
    vector_index_config: VectorIndexConfig | None = None
    vector_index_type: str | None = None
    vectorizer: str | None = None

    def openai_config(self) -> Text2VecOpenAIConfig | None:
        settings = (self.module_config or {}).get("text2vec-openai")
        if not isinstance(settings, Mapping):
            return None
        return Text2VecOpenAIConfig.model_validate(settings)


@dataclass(slots=True)
class BatchSummary:
    """Totals collected across a chunked batch upload."""

    batches: int = 0
    vectorized: int = 0
    errors: int = 0
    failed_batches: int = 0
    last_error: dict[str, Any] | None = None

    @property
    def succeeded(self) -> bool:
        return self.failed_batches == 0 and self.errors == 0


def beacon(
    class_name: str,
    object_id: str,
    property_name: str | None = None,
    *,
    host: str = "localhost",
) -> str:
    """Build a ``weaviate://`` beacon, optionally pointing at a property."""
    value = f"weaviate://{host}/{class_name}/{object_id}"
    if property_name:
        value = f"{value}/{property_name}"
    return value


def to_wire(value: WireModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(value, WireModel):
        return value.to_wire()
    return {key: item for key, item in value.items() if item is not None}


__all__ = [
    "BatchDataObject",
    "BatchDeleteMatch",
    "BatchReference",
    "BatchSummary",
    "BM25Config",
    "ClassSchema",
    "CollectionSchema",
    "CollectionUpdate",
    "ConsistencyLevel",
    "DataObject",
    "DataObjectWithVector",
    "DeleteOutput",
    "InvertedIndexConfig",
    "MultiTenancyConfig",
    "PQConfig",
    "Reference",
    "ReplicationConfig",
    "ShardingConfig",
    "StopwordsConfig",
    "Text2VecOpenAIConfig",
    "VectorIndexConfig",
    "WireModel",
    "beacon",
    "to_wire",
]
