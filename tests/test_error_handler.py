from src.error_handler import ErrorHandler
from src.integrations.contracts.errors import AuthRequired, UpstreamApiError


def test_handle_exception_returns_payload():
    eh = ErrorHandler()
    out = eh.handle_exception(UpstreamApiError("Product API request failed", status_code=401, body="boom"), context={"k": "v"})
    assert out == {
        "status_code": 500,
        "title": "Error retrieving AI-FEED data",
        "message": "Product API request failed: 401 - boom",
    }


def test_render_page_escapes_message_and_links_to_auth():
    page = ErrorHandler().render_page(UpstreamApiError("failed", status_code=500, body="<script>alert(1)</script>"))
    assert "<script>alert(1)</script>" not in page
    assert "&lt;script&gt;" in page
    assert 'href="/auth"' in page
    assert "Error retrieving AI-FEED data" in page


def test_callback_errors_use_authentication_title():
    page = ErrorHandler().render_page(AuthRequired(), context={"path": "/"})
    assert "<h1>Authentication failed</h1>" in page
    assert "Please visit /auth" in page
