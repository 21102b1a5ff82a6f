"""Adapters between Starlette/FastAPI objects and the cookie transport."""

from typing import List, Optional

from starlette.requests import HTTPConnection
from starlette.responses import Response

from ..entities.protocols import HeaderValue


class StarletteRequestAdapter:
    """Exposes a Starlette request (or websocket) through ``headers``."""

    def __init__(self, connection: HTTPConnection):
        self.headers = connection.headers


class StarletteResponseAdapter:
    """Writes headers to a Starlette response, one raw header line per value."""

    def __init__(self, response: Response):
        self.response = response

    def get_header(self, name: str) -> Optional[HeaderValue]:
        values: List[str] = self.response.headers.getlist(name)
        if not values:
            return None
        return values[0] if len(values) == 1 else values

    def set_header(self, name: str, value: HeaderValue) -> None:
        del self.response.headers[name]
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            self.response.headers.append(name, str(item))
