"""
Naming policies shared by both directions: how attribute and relationship
names are cased on their way to and from the wire, and how a resource's
``type`` is derived from the name it is reached through.
"""

import collections.abc
import enum
import typing

import inflection  # type: ignore

from .exceptions import InvalidConfigurationError
from .utils import english_enumerate


class KeyCase(enum.Enum):
    DASH = "dash-case"
    LISP = "lisp-case"
    SPINAL = "spinal-case"
    KEBAB = "kebab-case"
    UNDERSCORE = "underscore_case"
    SNAKE = "snake_case"
    PASCAL = "CamelCase"
    CAMEL = "camelCase"


KeyForAttribute = typing.Callable[[str], str]
KeyCasePolicy = typing.Union[KeyCase, str, KeyForAttribute, None]


def caserize(name: str, case: typing.Optional[KeyCase] = None) -> str:
    """
    Converts ``name`` to the given case; dash-case if ``case`` is omitted.

    >>> caserize("addressLine1")
    'address-line1'
    >>> caserize("first-name", KeyCase.CAMEL)
    'firstName'
    """
    underscored = inflection.underscore(name)
    if case in (KeyCase.UNDERSCORE, KeyCase.SNAKE):
        return underscored
    elif case is KeyCase.PASCAL:
        return inflection.camelize(underscored)
    elif case is KeyCase.CAMEL:
        return inflection.camelize(underscored, False)
    else:
        return inflection.dasherize(underscored)


def _coerce_key_case(value: str) -> KeyCase:
    try:
        return KeyCase(value)
    except ValueError:
        raise InvalidConfigurationError(
            f'unknown key case "{value}"; expected one of '
            + english_enumerate((c.value for c in KeyCase), conj=", or ", quote='"')
        ) from None


class KeyFormatter:
    """
    Applies a key casing policy to a name, or recursively to every key of a
    nested mapping (including mappings inside sequences).
    """

    _func: typing.Optional[KeyForAttribute] = None
    _case: typing.Optional[KeyCase] = None

    def key(self, name: str) -> str:
        if self._func is not None:
            return self._func(name)
        return caserize(name, self._case)

    def __call__(self, value: typing.Any) -> typing.Any:
        if isinstance(value, collections.abc.Mapping):
            return {self.key(k): self(v) for k, v in value.items()}
        elif isinstance(value, (list, tuple)):
            return [self(v) for v in value]
        else:
            return value

    def __init__(self, policy: KeyCasePolicy = None):
        if policy is None or isinstance(policy, KeyCase):
            self._case = policy
        elif isinstance(policy, str):
            self._case = _coerce_key_case(policy)
        elif callable(policy):
            self._func = policy
        else:
            raise InvalidConfigurationError(f"invalid key_for_attribute: {policy!r}")


TypeForAttribute = typing.Callable[[str, typing.Any], typing.Optional[str]]


def pluralize(name: str) -> str:
    return inflection.pluralize(name)


class TypeResolver:
    type_for_attribute: typing.Optional[TypeForAttribute]
    pluralize_type: bool

    def __call__(self, name: str, record: typing.Any = None) -> str:
        """
        Returns the wire ``type`` for a resource reached through ``name``.

        :param str name: a collection or relationship name.
        :param Any record: the record being typed, handed to the caller hook.
        :return: the value of ``type_for_attribute`` unless it returns ``None``,
                 then the pluralized name unless pluralization is disabled,
                 then the name itself.
        """
        if self.type_for_attribute is not None:
            type_ = self.type_for_attribute(name, record if record is not None else {})
            if type_ is not None:
                return type_
        if self.pluralize_type:
            return pluralize(name)
        return name

    def __init__(
        self,
        type_for_attribute: typing.Optional[TypeForAttribute] = None,
        pluralize_type: bool = True,
    ):
        self.type_for_attribute = type_for_attribute
        self.pluralize_type = pluralize_type
