"""Error page rendering for the AI feed endpoints."""
from html import escape
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

_ERROR_PAGE = """<!DOCTYPE html>
<html lang="ko">
<head><meta charset="UTF-8"><title>Error</title></head>
<body>
    <h1>{title}</h1>
    <p>An error occurred: {message}</p>
    <p>Please check the server logs for more details.</p>
    <hr>
    <p>If authorization is required, please <a href="/auth">click here to authorize the app</a>.</p>
</body></html>
"""


class ErrorHandler:
    status_code = 500

    def handle_exception(self, exc: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in AI feed request: %s", exc, exc_info=True)
        return {
            "status_code": self.status_code,
            "title": self._title_for(exc, context or {}),
            "message": str(exc),
        }

    def render_page(self, exc: Exception, context: Optional[Dict[str, Any]] = None) -> str:
        payload = self.handle_exception(exc, context)
        return _ERROR_PAGE.format(title=escape(payload["title"]), message=escape(payload["message"]))

    def _title_for(self, exc: Exception, context: Dict[str, Any]) -> str:
        if context.get("path") == "/":
            return "Authentication failed"
        return "Error retrieving AI-FEED data"
