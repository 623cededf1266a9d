"""Pytest fixtures and fakes for the token, catalogue and feed tests."""

import json
from urllib.parse import parse_qsl

import httpx
import pytest

from src.database.redis import TokenCache

MALL_ID = "testmall"
API_BASE = f"https://{MALL_ID}.cafe24api.com"
NOW = 1_700_000_000.0


class FakeClock:
    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_products(count: int, start: int = 1):
    return [
        {
            "product_no": n,
            "product_name": f"Product {n}",
            "list_image": f"https://img.example.com/small/{n}.jpg",
            "detail_image": f"https://img.example.com/big/{n}.jpg",
            "price": "10000.00",
            "stock_quantity": n % 3,
        }
        for n in range(start, start + count)
    ]


class FakeCafe24:
    """
    Stands in for both Cafe24 endpoints behind an httpx.MockTransport.

    token_responses: queue of (status, body) returned by /oauth/token
    product_pages: queue of (status, body) returned by /products, in page order
    """

    def __init__(self, token_responses=None, product_pages=None):
        self.token_responses = list(token_responses or [])
        self.product_pages = list(product_pages or [])
        self.token_requests = []
        self.product_requests = []

    @classmethod
    def with_page_sizes(cls, sizes, token_responses=None):
        pages = []
        start = 1
        for size in sizes:
            pages.append((200, {"products": make_products(size, start=start)}))
            start += size
        return cls(token_responses=token_responses, product_pages=pages)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            self.token_requests.append(dict(parse_qsl(request.content.decode())))
            status, body = self.token_responses.pop(0)
        elif request.url.path == "/api/v2/products":
            self.product_requests.append(request)
            status, body = self.product_pages.pop(0)
        else:
            return httpx.Response(404, text="not found")

        if isinstance(body, (dict, list)):
            return httpx.Response(status, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})
        return httpx.Response(status, text=body)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    """In-memory token store."""
    return TokenCache()
