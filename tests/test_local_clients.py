import json

import pytest

from src.integrations.clients.mocks.local_oauth import MockOAuthClient
from src.integrations.clients.mocks.local_product_catalogues import LocalProductCatalogueClient
from src.integrations.contracts.errors import UpstreamAuthError

from conftest import make_products


@pytest.mark.asyncio
async def test_local_catalogue_serves_bundled_sample():
    result = await LocalProductCatalogueClient().fetch_all_products("ignored")

    assert result.ok
    assert len(result.products) == 3
    assert {p["product_no"] for p in result.products} == {101, 102, 103}


@pytest.mark.asyncio
async def test_local_catalogue_pages_like_the_real_client(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({"products": make_products(250)}), encoding="utf-8")

    result = await LocalProductCatalogueClient(sample_path=path).fetch_all_products("ignored")

    assert len(result.products) == 250
    assert result.pages_fetched == 3


@pytest.mark.asyncio
async def test_local_catalogue_missing_file_is_empty(tmp_path):
    result = await LocalProductCatalogueClient(sample_path=tmp_path / "nope.json").fetch_all_products("ignored")
    assert result.products == []


@pytest.mark.asyncio
async def test_mock_oauth_issues_tokens_and_rejects_configured_codes():
    oauth = MockOAuthClient(expires_in=60, reject_codes={"bad"})

    cc = await oauth.client_credentials_grant()
    exchanged = await oauth.authorization_code_grant("good")

    assert cc.refresh_token is None
    assert cc.expires_in == 60
    assert exchanged.refresh_token
    with pytest.raises(UpstreamAuthError):
        await oauth.authorization_code_grant("bad")
    assert oauth.calls == ["client_credentials", "authorization_code", "authorization_code"]
    assert oauth.authorize_url().endswith("?code=mock-code")
