import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    INTERNAL = "INTERNAL"


class CartServiceError(Exception):
    """Base error raised by the service layer.

    Carries an error kind and a message only; translating the kind into a
    transport status happens in the application's exception handler.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(CartServiceError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class InvalidRequestError(CartServiceError):
    kind = ErrorKind.INVALID_REQUEST
    default_message = "Invalid request"


class InternalError(CartServiceError):
    kind = ErrorKind.INTERNAL
