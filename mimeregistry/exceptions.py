"""Errors and outcome markers raised or returned by the mime registry."""

from typing import Any
from typing import Dict
from typing import Optional


class MimeRegistryError(Exception):
    """
    Base class for registry errors.
    Carries a message plus optional structured details.
    """

    def __init__(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgument(MimeRegistryError, ValueError):
    """Malformed key, accept list, header map or quality passed to register()."""


class UnknownMimeType(MimeRegistryError, LookupError):
    """Lookup of a key that is not registered."""

    def __init__(self, key: str) -> None:
        super().__init__(f"{key!r} is not a valid MIME-type", {"key": key})
        self.key = key


class MissingSerializer(MimeRegistryError, LookupError):
    """A transform method was named but no serializer provides it."""

    def __init__(self, transform_method: str) -> None:
        super().__init__(
            f"No serializer registered for {transform_method!r}",
            {"transform_method": transform_method},
        )
        self.transform_method = transform_method


class NotAcceptable(MimeRegistryError):
    """None of the provided formats satisfies the Accept header."""

    def __init__(self, accept: Optional[str], provided: Any) -> None:
        super().__init__(
            "No acceptable format",
            {"accept": accept, "provided": list(provided)},
        )


class _Outcome:
    """Falsy marker returned by unregister() when nothing was removed."""

    def __init__(self, name: str) -> None:
        self._name = name

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return self._name


NOT_REMOVABLE = _Outcome("NOT_REMOVABLE")
NOT_PRESENT = _Outcome("NOT_PRESENT")
