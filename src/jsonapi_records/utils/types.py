import typing


class UndefinedType:
    """
    The type of :py:data:`UNDEFINED`, a marker for "no value at all" that is
    distinct from :py:const:`None`, which is a legitimate JSON ``null``.
    """

    _singleton: typing.ClassVar[typing.Optional["UndefinedType"]] = None

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNDEFINED"

    def __new__(cls) -> "UndefinedType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNDEFINED = UndefinedType()
