import pytest

from wvclient.vectordb.models import DataObject, DataObjectWithVector, Reference, beacon


@pytest.mark.asyncio
async def test_create_object_adds_consistency_level(handler, make_client):
    handler.queue(200, {"id": "obj-1"})
    data_object = DataObject(class_name="Article", properties={"title": "Hello"})

    async with make_client() as client:
        response = await client.create_object(data_object, consistency_level="QUORUM")

    request = handler.last
    assert request.method == "POST"
    assert request.url.path == "/v1/objects"
    assert request.url.params["consistency_level"] == "QUORUM"
    assert handler.body(request) == {"class": "Article", "properties": {"title": "Hello"}}
    assert response == {"id": "obj-1"}


@pytest.mark.asyncio
async def test_create_object_without_consistency_level_sends_no_query(handler, make_client):
    data_object = DataObject(class_name="Article", properties={}, id="obj-1", tenant="acme")

    async with make_client() as client:
        await client.create_object(data_object)

    assert handler.last.url.query == b""
    assert handler.body(handler.last) == {
        "class": "Article",
        "properties": {},
        "id": "obj-1",
        "tenant": "acme",
    }


@pytest.mark.asyncio
async def test_create_vector_forwards_custom_vector(handler, make_client):
    data_object = DataObjectWithVector(
        class_name="Article",
        properties={"title": "Hello"},
        vector=[0.1, 0.2, 0.3],
    )

    async with make_client() as client:
        await client.create_vector(data_object, consistency_level="ALL")

    assert handler.last.url.params["consistency_level"] == "ALL"
    assert handler.body(handler.last)["vector"] == [0.1, 0.2, 0.3]


@pytest.mark.asyncio
async def test_update_object_replaces_by_class_and_id(handler, make_client):
    data_object = DataObject(class_name="Article", properties={"title": "Updated"})

    async with make_client() as client:
        await client.update_object("Article", "obj-1", data_object, consistency_level="ONE")

    assert handler.last.method == "PUT"
    assert handler.last.url.path == "/v1/objects/Article/obj-1"
    assert handler.last.url.params["consistency_level"] == "ONE"


@pytest.mark.asyncio
async def test_patch_object_drops_unset_fields(handler, make_client):
    async with make_client() as client:
        await client.patch_object(
            "Article",
            "obj-1",
            {"properties": {"title": "Patched"}, "tenant": None},
        )

    assert handler.last.method == "PATCH"
    assert handler.last.url.path == "/v1/objects/Article/obj-1"
    assert handler.body(handler.last) == {"properties": {"title": "Patched"}}


@pytest.mark.asyncio
async def test_validate_object_posts_to_validate_endpoint(handler, make_client):
    data_object = DataObject(class_name="Article", properties={"title": "Hello"})

    async with make_client() as client:
        await client.validate_object(data_object)

    assert handler.last.method == "POST"
    assert handler.last.url.path == "/v1/objects/validate"


@pytest.mark.asyncio
async def test_reference_operations_share_property_path(handler, make_client):
    target = Reference(beacon=beacon("Author", "author-1"))
    other = Reference(beacon=beacon("Author", "author-2"))

    async with make_client() as client:
        await client.add_reference("Article", "obj-1", "writtenBy", target, consistency_level="ONE")
        await client.update_reference("Article", "obj-1", "writtenBy", [target, other])
        await client.delete_reference("Article", "obj-1", "writtenBy", target)

    methods = [request.method for request in handler.requests]
    assert methods == ["POST", "PUT", "DELETE"]
    assert {request.url.path for request in handler.requests} == {
        "/v1/objects/Article/obj-1/references/writtenBy"
    }
    assert handler.requests[0].url.params["consistency_level"] == "ONE"
    assert handler.body(handler.requests[0]) == {"beacon": "weaviate://localhost/Author/author-1"}
    assert handler.body(handler.requests[1]) == [
        {"beacon": "weaviate://localhost/Author/author-1"},
        {"beacon": "weaviate://localhost/Author/author-2"},
    ]
    assert handler.body(handler.requests[2]) == {"beacon": "weaviate://localhost/Author/author-1"}


def test_beacon_can_point_at_a_property():
    assert beacon("Article", "obj-1", "writtenBy") == "weaviate://localhost/Article/obj-1/writtenBy"
    assert beacon("Article", "obj-1", host="db") == "weaviate://db/Article/obj-1"
