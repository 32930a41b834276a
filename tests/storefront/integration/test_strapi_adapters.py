"""Integration tests for the Strapi-backed adapters, served by httpx.MockTransport."""

import json

import httpx
import pytest

from storefront.catalog import get_catalog
from storefront.catalog.strapi_adapter import StrapiCatalog
from storefront.config import reset_settings
from storefront.exceptions import StoreError, UploadFailure
from storefront.media import get_media_library
from storefront.media.strapi_adapter import StrapiMediaLibrary
from storefront.order.models import CreateOrderRequest, DeliveryMethod, OrderLineItem
from storefront.order.store import get_order_store
from storefront.order.store.strapi_adapter import StrapiOrderStore
from storefront.utils.strapi import StrapiClient, close_strapi_client

BASE_URL = "http://strapi.test"


class Recorder:
    """Records requests and answers from a route table keyed by (method, path)."""

    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": {"status": 404, "name": "NotFoundError"}})
        return handler(request) if callable(handler) else handler


def _client(routes):
    recorder = Recorder(routes)
    client = StrapiClient(BASE_URL, api_token="secret", transport=httpx.MockTransport(recorder))
    return client, recorder


@pytest.fixture()
def order_request():
    return CreateOrderRequest(
        order_number="ORD-TEST-0001",
        customer_name="Dana",
        items=(
            OrderLineItem(
                kind="drink", product_id="soda", product_name="Soda", quantity=1, unit_price=12.5, total_price=12.5
            ),
        ),
        subtotal=12.5,
        delivery_fee=15.0,
        total=27.5,
        delivery_method=DeliveryMethod.DELIVERY,
        customer_address="1 Harbour St",
    )


class TestStrapiClient:
    async def test_bearer_token_and_api_prefix(self):
        client, recorder = _client({("GET", "/api/ping"): httpx.Response(200, json={"ok": True})})
        assert await client.get("/ping") == {"ok": True}
        assert recorder.requests[0].headers["Authorization"] == "Bearer secret"
        await client.aclose()

    async def test_error_status_raises_store_error(self):
        client, _ = _client({("GET", "/api/ping"): httpx.Response(500, json={"error": "boom"})})
        with pytest.raises(StoreError) as exc_info:
            await client.get("/ping")
        assert exc_info.value.status_code == 500
        assert "boom" in str(exc_info.value)

    async def test_transport_error_raises_store_error(self):
        def explode(request):
            raise httpx.ConnectError("refused", request=request)

        client = StrapiClient(BASE_URL, transport=httpx.MockTransport(explode))
        with pytest.raises(StoreError) as exc_info:
            await client.get("/ping")
        assert exc_info.value.status_code is None

    async def test_non_json_body_raises_store_error(self):
        page = httpx.Response(200, text="<html>proxy</html>", headers={"content-type": "text/html"})
        client, _ = _client({("GET", "/api/ping"): page})
        with pytest.raises(StoreError) as exc_info:
            await client.get("/ping")
        assert exc_info.value.status_code == 200
        assert "non-JSON" in str(exc_info.value)

    def test_absolute_url(self):
        client = StrapiClient(BASE_URL + "/")
        assert client.absolute_url("/uploads/a.jpg") == "http://strapi.test/uploads/a.jpg"
        assert client.absolute_url("uploads/a.jpg") == "http://strapi.test/uploads/a.jpg"
        assert client.absolute_url("https://cdn.test/a.jpg") == "https://cdn.test/a.jpg"
        assert client.absolute_url("") == ""


class TestStrapiOrderStore:
    async def test_create_sends_pending_order_with_serialized_items(self, order_request):
        def created(request):
            data = json.loads(request.content)["data"]
            return httpx.Response(200, json={"data": {"id": 4, "documentId": "doc-4", **data}})

        client, recorder = _client({("POST", "/api/orders"): created})
        result = await StrapiOrderStore(client).create(order_request)

        sent = json.loads(recorder.requests[0].content)["data"]
        assert sent["status"] == "pending"
        assert sent["orderNumber"] == "ORD-TEST-0001"
        assert "publishedAt" in sent
        assert isinstance(sent["items"], str)
        assert json.loads(sent["items"])[0]["drinkId"] == "soda"

        assert result.id == "doc-4"
        assert result.order_number == "ORD-TEST-0001"
        assert result.order.items[0].product_id == "soda"

    async def test_get_by_order_number_filters(self):
        entry = {"id": 4, "attributes": {"orderNumber": "ORD-TEST-0001", "status": "ready", "items": "[]"}}
        client, recorder = _client({("GET", "/api/orders"): httpx.Response(200, json={"data": [entry]})})

        order = await StrapiOrderStore(client).get("ORD-TEST-0001")

        params = recorder.requests[0].url.params
        assert params["filters[orderNumber][$eq]"] == "ORD-TEST-0001"
        assert params["sort"] == "createdAt:desc"
        assert order.status == "ready"

    async def test_get_unknown_order_number(self):
        client, _ = _client({("GET", "/api/orders"): httpx.Response(200, json={"data": []})})
        assert await StrapiOrderStore(client).get("ORD-NOPE-0000") is None

    async def test_get_by_id(self):
        client, _ = _client(
            {("GET", "/api/orders/doc-4"): httpx.Response(200, json={"data": {"documentId": "doc-4", "orderNumber": "ORD-A-0000"}})}
        )
        order = await StrapiOrderStore(client).get("doc-4")
        assert order.id == "doc-4"

    async def test_get_by_unknown_id(self):
        client, _ = _client({})
        assert await StrapiOrderStore(client).get("doc-404") is None

    async def test_update_sends_status_only(self):
        def updated(request):
            return httpx.Response(
                200, json={"data": {"documentId": "doc-4", "orderNumber": "ORD-A-0000", "status": "confirmed"}}
            )

        client, recorder = _client({("PUT", "/api/orders/doc-4"): updated})
        order = await StrapiOrderStore(client).update_status("doc-4", "confirmed")

        assert json.loads(recorder.requests[0].content) == {"data": {"status": "confirmed"}}
        assert order.status == "confirmed"

    async def test_update_failure_raises(self):
        client, _ = _client({("PUT", "/api/orders/doc-4"): httpx.Response(500, json={})})
        with pytest.raises(StoreError):
            await StrapiOrderStore(client).update_status("doc-4", "confirmed")


class TestStrapiCatalog:
    MEAL = {
        "id": 1,
        "attributes": {
            "name": "Roll A",
            "price": 42,
            "category": {"data": {"id": 3, "attributes": {"slug": "rolls"}}},
            "image": {"data": {"attributes": {"url": "/uploads/roll.jpg"}}},
            "ingredients": {
                "data": [
                    {"id": 10, "attributes": {"name": "Rice", "price": 0, "isDefault": True}},
                    {"id": 11, "attributes": {"name": "Spicy Mayo", "price": 3, "isDefault": False}},
                ]
            },
        },
    }

    async def test_meal_transform(self):
        client, recorder = _client({("GET", "/api/meals/1"): httpx.Response(200, json={"data": self.MEAL})})
        meal = await StrapiCatalog(client).get_meal("1", locale="he")

        assert recorder.requests[0].url.params["locale"] == "he"
        assert meal.category_slug == "rolls"
        assert meal.image_url == "http://strapi.test/uploads/roll.jpg"
        assert [i.name for i in meal.default_ingredients] == ["Rice"]
        assert [i.id for i in meal.optional_ingredients] == ["11"]

    async def test_default_ingredients(self):
        client, _ = _client({("GET", "/api/meals/1"): httpx.Response(200, json={"data": self.MEAL})})
        defaults = await StrapiCatalog(client).default_ingredients("1")
        assert [i.id for i in defaults] == ["10"]

    async def test_unknown_meal(self):
        client, _ = _client({})
        catalog = StrapiCatalog(client)
        assert await catalog.get_meal("99") is None
        assert await catalog.default_ingredients("99") == []

    async def test_list_meals_by_category(self):
        client, recorder = _client({("GET", "/api/meals"): httpx.Response(200, json={"data": [self.MEAL]})})
        meals = await StrapiCatalog(client).list_meals(category_slug="rolls")
        assert recorder.requests[0].url.params["filters[category][slug][$eq]"] == "rolls"
        assert [m.name for m in meals] == ["Roll A"]

    async def test_flat_drink_with_image_url_field(self):
        drink = {"id": 5, "name": "Soda", "price": 12.5, "categorySlug": "drinks", "imageUrl": "https://cdn.test/soda.png"}
        client, _ = _client({("GET", "/api/drinks"): httpx.Response(200, json={"data": [drink]})})
        drinks = await StrapiCatalog(client).list_drinks()
        assert drinks[0].image_url == "https://cdn.test/soda.png"
        assert drinks[0].category_slug == "drinks"

    async def test_null_data_gives_empty_list(self):
        client, _ = _client({("GET", "/api/categories"): httpx.Response(200, json={"data": None})})
        assert await StrapiCatalog(client).list_categories() == []


class TestStrapiMediaLibrary:
    async def test_upload_returns_absolute_url(self):
        def uploaded(request):
            assert b'name="files"' in request.content
            return httpx.Response(200, json=[{"id": 1, "url": "/uploads/note.jpg"}])

        client, recorder = _client({("POST", "/api/upload"): uploaded})
        url = await StrapiMediaLibrary(client).upload("note.jpg", b"\xff\xd8")
        assert url == "http://strapi.test/uploads/note.jpg"
        assert recorder.requests[0].headers["content-type"].startswith("multipart/form-data")

    async def test_falls_back_to_largest_format(self):
        body = [{"id": 1, "formats": {"small": {"url": "/s.jpg"}, "medium": {"url": "/m.jpg"}}}]
        client, _ = _client({("POST", "/api/upload"): httpx.Response(200, json=body)})
        assert await StrapiMediaLibrary(client).upload("note.jpg", b"x") == "http://strapi.test/m.jpg"

    async def test_rejected_upload(self):
        client, _ = _client({("POST", "/api/upload"): httpx.Response(413, json={})})
        with pytest.raises(UploadFailure):
            await StrapiMediaLibrary(client).upload("note.jpg", b"x")

    async def test_empty_response(self):
        client, _ = _client({("POST", "/api/upload"): httpx.Response(200, json=[])})
        with pytest.raises(UploadFailure):
            await StrapiMediaLibrary(client).upload("note.jpg", b"x")

    async def test_html_reply_is_an_upload_failure(self):
        page = httpx.Response(200, text="<html>proxy</html>", headers={"content-type": "text/html"})
        client, _ = _client({("POST", "/api/upload"): page})
        with pytest.raises(UploadFailure):
            await StrapiMediaLibrary(client).upload("note.jpg", b"x")


class TestSharedClient:
    async def test_strapi_adapters_share_one_client(self, monkeypatch):
        for name in ("CATALOG_ADAPTER", "ORDER_STORE_ADAPTER", "MEDIA_ADAPTER"):
            monkeypatch.setenv(name, "strapi")
        reset_settings()

        client = get_catalog().client
        assert get_order_store().client is client
        assert get_media_library().client is client

        await close_strapi_client()
        assert client._client.is_closed

    async def test_close_without_client_is_a_noop(self):
        await close_strapi_client()
