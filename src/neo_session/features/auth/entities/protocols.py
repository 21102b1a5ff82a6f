"""Protocol interfaces for the auth feature."""

from abc import abstractmethod
from typing import Any, List, Optional, Protocol, Union, runtime_checkable

from .credential import Credential

HeaderValue = Union[str, List[str]]


@runtime_checkable
class UserStoreProtocol(Protocol):
    """Protocol for user credential persistence.

    Implementations treat email as a case-normalized unique key and raise
    ``DuplicateEmailError`` when an insert conflicts with an existing email.
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Credential]:
        """Find the credential registered for an email."""
        ...

    @abstractmethod
    async def create_user(self, email: str, password_hash: str) -> Credential:
        """Persist a new credential and return it with its assigned id."""
        ...


@runtime_checkable
class RequestProtocol(Protocol):
    """Inbound HTTP request exposing read-only headers.

    ``headers.get("cookie")`` returns the raw cookie header as a string, a
    list of strings, or ``None``.
    """

    headers: Any


@runtime_checkable
class ResponseProtocol(Protocol):
    """Outbound HTTP response accepting headers.

    Responses may also expose ``get_header(name) -> Optional[HeaderValue]``.
    When present it is used to append to existing ``Set-Cookie`` values;
    when absent ``set_header`` itself must append rather than replace.
    """

    @abstractmethod
    def set_header(self, name: str, value: HeaderValue) -> None:
        """Set a header to the given value or list of values."""
        ...
