import abc
import typing

from .types import JSONValue
from .utils import JSONPointer


class JSONAPIRecordsError(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class InvalidConfigurationError(JSONAPIRecordsError):
    _message: str
    path: typing.Sequence[str]

    @property
    def message(self) -> str:
        if not self.path:
            return self._message
        return f"{'.'.join(self.path)}: {self._message}"

    def __init__(self, message: str, path: typing.Sequence[str] = ()):
        super().__init__(message)
        self._message = message
        self.path = path


class DeserializationErrorItem(typing.NamedTuple):
    pointer: JSONPointer
    message: str


class DeserializationError(JSONAPIRecordsError):
    payload: JSONValue
    errors: typing.Sequence[DeserializationErrorItem]

    @property
    def message(self) -> str:
        return "; ".join(f"{e.pointer}: {e.message}" for e in self.errors)

    def __init__(self, payload: JSONValue, errors: typing.Sequence[DeserializationErrorItem]):
        super().__init__(payload, errors)
        self.payload = payload
        self.errors = errors


class AsynchronousResolverError(JSONAPIRecordsError):
    type: str

    @property
    def message(self) -> str:
        return (
            "synchronous call cannot accept an asynchronous relationship resolver"
            f' (value_for_relationship of "{self.type}" returned an awaitable)'
        )

    def __init__(self, type: str):
        super().__init__(type)
        self.type = type
