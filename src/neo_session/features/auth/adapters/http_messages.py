"""Framework-free request and response header containers.

Useful for tests, for non-ASGI servers, and anywhere the session service
runs without a web framework's request objects.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..entities.protocols import HeaderValue


class CaseInsensitiveHeaders:
    """Read-only header mapping with case-insensitive names."""

    def __init__(self, headers: Optional[Mapping[str, HeaderValue]] = None):
        self._headers: Dict[str, HeaderValue] = {
            name.lower(): value for name, value in (headers or {}).items()
        }

    def get(self, name: str, default: Optional[HeaderValue] = None) -> Optional[HeaderValue]:
        return self._headers.get(name.lower(), default)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._headers

    def __len__(self) -> int:
        return len(self._headers)


class HeaderRequest:
    """Inbound request carrying only headers."""

    def __init__(self, headers: Optional[Mapping[str, HeaderValue]] = None):
        self.headers = CaseInsensitiveHeaders(headers)

    @classmethod
    def with_cookies(cls, cookies: Mapping[str, str]) -> "HeaderRequest":
        """Build a request whose Cookie header holds the given pairs verbatim."""
        header = "; ".join(f"{name}={value}" for name, value in cookies.items())
        return cls({"cookie": header})


class HeaderResponse:
    """Outbound response collecting headers, multi-valued per name."""

    def __init__(self):
        self._headers: Dict[str, Tuple[str, List[str]]] = {}

    def set_header(self, name: str, value: HeaderValue) -> None:
        values = list(value) if isinstance(value, (list, tuple)) else [value]
        self._headers[name.lower()] = (name, [str(item) for item in values])

    def get_header(self, name: str) -> Optional[HeaderValue]:
        entry = self._headers.get(name.lower())
        if entry is None:
            return None
        values = entry[1]
        return values[0] if len(values) == 1 else list(values)

    def get_all(self, name: str) -> List[str]:
        entry = self._headers.get(name.lower())
        return list(entry[1]) if entry else []

    def items(self) -> Iterable[Tuple[str, str]]:
        """Header lines as (name, value) pairs, one per value."""
        for name, values in self._headers.values():
            for value in values:
                yield name, value
