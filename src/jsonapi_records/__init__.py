from .config import DeserializerConfig, ResourceConfig, TypeOptions  # noqa
from .deserializer import Deserializer  # noqa
from .errors import ErrorSerializer, JSONAPIError, NotFoundError  # noqa
from .exceptions import (  # noqa
    AsynchronousResolverError,
    DeserializationError,
    InvalidConfigurationError,
    JSONAPIRecordsError,
)
from .naming import KeyCase  # noqa
from .serializer import Serializer  # noqa
