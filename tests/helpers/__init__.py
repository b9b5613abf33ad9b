from .mocks import MockTransport, HangingTransport, SentRequest
from .factories import BASE_URL, json_response, page_url, link_header, mk_theme, mk_fulfillment

__all__ = [
    "MockTransport",
    "HangingTransport",
    "SentRequest",
    "BASE_URL",
    "json_response",
    "page_url",
    "link_header",
    "mk_theme",
    "mk_fulfillment",
]
