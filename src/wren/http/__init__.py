"""HTTP primitives: request, headers, query string, response writer."""

from wren.http.headers import Headers, ResponseHeaders
from wren.http.query import QueryParams
from wren.http.request import Request
from wren.http.writer import ResponseWriter

__all__ = ["Headers", "QueryParams", "Request", "ResponseHeaders", "ResponseWriter"]
