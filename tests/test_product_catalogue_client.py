import pytest

from src.integrations.clients.real_http.cafe24_products import Cafe24ProductCatalogueClient

from conftest import MALL_ID, FakeCafe24


def _client(fake: FakeCafe24, **kwargs) -> Cafe24ProductCatalogueClient:
    return Cafe24ProductCatalogueClient(mall_id=MALL_ID, transport=fake.transport, **kwargs)


@pytest.mark.asyncio
async def test_walks_pages_until_short_page():
    fake = FakeCafe24.with_page_sizes([100, 100, 37])

    result = await _client(fake).fetch_all_products("T1")

    assert result.ok
    assert len(result.products) == 237
    assert result.pages_fetched == 3
    assert result.truncated is False
    assert len(fake.product_requests) == 3
    assert [r.url.params["page"] for r in fake.product_requests] == ["1", "2", "3"]
    assert all(r.url.params["limit"] == "100" for r in fake.product_requests)
    assert fake.product_requests[0].headers["Authorization"] == "Bearer T1"
    assert [p["product_no"] for p in result.products] == list(range(1, 238))


@pytest.mark.asyncio
async def test_empty_first_page_stops_after_one_call():
    fake = FakeCafe24.with_page_sizes([0])

    result = await _client(fake).fetch_all_products("T1")

    assert result.ok
    assert result.products == []
    assert len(fake.product_requests) == 1


@pytest.mark.asyncio
async def test_catalogue_of_exact_page_multiple_ends_on_empty_page():
    fake = FakeCafe24.with_page_sizes([100, 0])

    result = await _client(fake).fetch_all_products("T1")

    assert len(result.products) == 100
    assert len(fake.product_requests) == 2


@pytest.mark.asyncio
async def test_failed_page_discards_accumulated_products():
    fake = FakeCafe24.with_page_sizes([100])
    fake.product_pages.append((401, {"error": {"code": 401, "message": "invalid_token"}}))

    result = await _client(fake).fetch_all_products("T1")

    assert not result.ok
    assert result.products == []
    assert result.error.status_code == 401
    assert "invalid_token" in str(result.error)


@pytest.mark.asyncio
async def test_page_cap_marks_result_truncated():
    fake = FakeCafe24.with_page_sizes([100, 100, 100])

    result = await _client(fake, max_pages=2).fetch_all_products("T1")

    assert result.ok
    assert result.truncated is True
    assert len(result.products) == 200
    assert len(fake.product_requests) == 2


@pytest.mark.asyncio
async def test_payload_without_products_key_fails_the_listing():
    fake = FakeCafe24.with_page_sizes([100])
    fake.product_pages.append((200, {"error": {"code": 500, "message": "maintenance"}}))

    result = await _client(fake).fetch_all_products("T1")

    assert not result.ok
    assert result.products == []
    assert result.error.status_code == 200
    assert "maintenance" in str(result.error)
    assert len(fake.product_requests) == 2


@pytest.mark.asyncio
async def test_products_key_with_empty_list_is_an_empty_page():
    fake = FakeCafe24(product_pages=[(200, {"products": []})])

    result = await _client(fake).fetch_all_products("T1")

    assert result.ok
    assert result.products == []


@pytest.mark.asyncio
async def test_rate_limiter_is_consulted_before_each_page():
    class CountingLimiter:
        def __init__(self):
            self.calls = 0

        async def wait_if_needed(self):
            self.calls += 1

    limiter = CountingLimiter()
    fake = FakeCafe24.with_page_sizes([100, 5])

    await _client(fake, rate_limiter=limiter).fetch_all_products("T1")

    assert limiter.calls == 2
