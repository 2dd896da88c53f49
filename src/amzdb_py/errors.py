from __future__ import annotations

from typing import Any


class AmzdbPyError(Exception):
    pass


class ValidationError(AmzdbPyError):
    pass


class EmptyRequestError(ValidationError):
    pass


class TooManyItemsError(ValidationError):
    def __init__(self, *, count: int, limit: int) -> None:
        super().__init__(f"each request cannot contain more than {limit} items (got {count})")
        self.count = count
        self.limit = limit


class ItemTooLargeError(ValidationError):
    def __init__(self, *, size: int, limit: int) -> None:
        super().__init__(f"the size of an item cannot exceed {limit} bytes (got {size})")
        self.size = size
        self.limit = limit


class RequestTooLargeError(ValidationError):
    def __init__(self, *, size: int, limit: int) -> None:
        super().__init__(f"the size of the request cannot exceed {limit} bytes (got {size})")
        self.size = size
        self.limit = limit


class NotFoundError(AmzdbPyError):
    pass


class MalformedResponseError(AmzdbPyError):
    def __init__(self, message: str, *, fragment: Any = None) -> None:
        super().__init__(f"{message}: {fragment!r}")
        self.fragment = fragment


class TransportError(AmzdbPyError):
    def __init__(self, *, code: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status_code = status_code
