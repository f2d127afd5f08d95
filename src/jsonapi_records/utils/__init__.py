from .formatting import english_enumerate  # noqa
from .jsonpointer import JSONPointer  # noqa
from .types import UNDEFINED, UndefinedType  # noqa
