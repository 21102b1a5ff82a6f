"""Cookie transport for session tokens.

Reads cookies from an inbound ``Cookie`` header and writes ``Set-Cookie``
headers with a fixed attribute order:
``name=value; HttpOnly; Secure; SameSite; Expires; Max-Age; Path; Domain``.
"""

import logging
import re
from datetime import timezone
from email.utils import format_datetime
from typing import Dict, List, Optional
from urllib.parse import quote, unquote

from ..entities.cookies import CookieOptions
from ..entities.protocols import HeaderValue, RequestProtocol, ResponseProtocol

logger = logging.getLogger(__name__)

SET_COOKIE_HEADER = "Set-Cookie"
COOKIE_HEADER = "cookie"

# Characters encodeURIComponent leaves untouched besides alphanumerics and "_.-~"
_COOKIE_VALUE_SAFE = "!*'()"

# "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _header_values(value: Optional[HeaderValue]) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def parse_cookie_header(header: Optional[HeaderValue]) -> Dict[str, str]:
    """Parse a Cookie header into raw (still encoded) values.

    The first occurrence of a name wins; pairs without ``=`` are skipped.
    """
    cookies: Dict[str, str] = {}
    joined = ";".join(_header_values(header))
    for pair in joined.split(";"):
        pair = pair.strip()
        if "=" not in pair:
            continue
        name, raw_value = pair.split("=", 1)
        cookies.setdefault(name.strip(), raw_value.strip())
    return cookies


def decode_cookie_value(raw_value: str) -> str:
    """Percent-decode a cookie value, returning it unchanged if that fails.

    Invalid escapes and non-UTF-8 byte sequences both count as failures.
    """
    if _BAD_ESCAPE.search(raw_value):
        return raw_value
    try:
        return unquote(raw_value, errors="strict")
    except UnicodeDecodeError:
        return raw_value


def serialize_cookie(name: str, value: str, options: CookieOptions) -> str:
    """Serialize a cookie and its attributes into a Set-Cookie value."""
    parts = [f"{name}={quote(value, safe=_COOKIE_VALUE_SAFE)}"]
    if options.http_only:
        parts.append("HttpOnly")
    if options.secure:
        parts.append("Secure")
    if options.same_site is not None:
        parts.append(f"SameSite={options.same_site.header_value}")
    if options.expires is not None:
        expires = options.expires.astimezone(timezone.utc)
        parts.append(f"Expires={format_datetime(expires, usegmt=True)}")
    if options.max_age is not None:
        parts.append(f"Max-Age={options.max_age}")
    if options.path:
        parts.append(f"Path={options.path}")
    if options.domain:
        parts.append(f"Domain={options.domain}")
    return "; ".join(parts)


class CookieService:
    """Reads and writes cookies on request/response objects."""

    def read(self, request: RequestProtocol, name: str) -> Optional[str]:
        """Read a cookie value from the request, or ``None`` if absent."""
        headers = getattr(request, "headers", None)
        if not headers:
            return None

        raw_value = parse_cookie_header(headers.get(COOKIE_HEADER)).get(name)
        if raw_value is None:
            return None
        return decode_cookie_value(raw_value)

    def write(
        self,
        response: ResponseProtocol,
        name: str,
        value: str,
        options: Optional[CookieOptions] = None,
    ) -> None:
        """Append a Set-Cookie header to the response.

        Existing Set-Cookie values are preserved so several cookies can be
        written to the same response.
        """
        cookie = serialize_cookie(name, value, options or CookieOptions())

        get_header = getattr(response, "get_header", None)
        previous = _header_values(get_header(SET_COOKIE_HEADER)) if callable(get_header) else []

        if previous:
            response.set_header(SET_COOKIE_HEADER, [*previous, cookie])
        else:
            response.set_header(SET_COOKIE_HEADER, cookie)
        logger.debug(f"Wrote cookie {name}")

    def clear(
        self,
        response: ResponseProtocol,
        name: str,
        options: Optional[CookieOptions] = None,
    ) -> None:
        """Instruct the client to drop a cookie.

        ``options`` must carry the same path, domain and SameSite the cookie
        was set with, otherwise browsers keep the original.
        """
        self.write(response, name, "", (options or CookieOptions()).expired())
