import typing


def _escape(component: str) -> str:
    return component.replace("~", "~0").replace("/", "~1")


def _unescape(component: str) -> str:
    return component.replace("~1", "/").replace("~0", "~")


class JSONPointer:
    """
    An immutable `JSON Pointer <https://tools.ietf.org/html/rfc6901>`_.

    ``pointer / "name"`` appends an object member and ``pointer[0]`` appends an
    array index, each yielding a new pointer.
    """

    components: typing.Tuple[str, ...]

    def __truediv__(self, component: typing.Union[str, int]) -> "JSONPointer":
        return JSONPointer(components=self.components + (str(component),))

    def __getitem__(self, index: int) -> "JSONPointer":
        return self / index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONPointer):
            return NotImplemented
        return self.components == other.components

    def __hash__(self) -> int:
        return hash(self.components)

    def __str__(self) -> str:
        return "/" + "/".join(_escape(c) for c in self.components)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __init__(
        self,
        path: str = "/",
        *,
        components: typing.Optional[typing.Iterable[str]] = None,
    ):
        if components is not None:
            self.components = tuple(components)
            return
        if path in ("", "/"):
            self.components = ()
        elif not path.startswith("/"):
            raise ValueError(f"invalid JSON pointer: {path!r}")
        else:
            self.components = tuple(_unescape(c) for c in path[1:].split("/"))
