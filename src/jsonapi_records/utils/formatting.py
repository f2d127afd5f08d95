import typing


def english_enumerate(
    items: typing.Iterable[str], conj: str = ", and ", quote: typing.Optional[str] = None
) -> str:
    """
    Joins ``items`` the way an English sentence would enumerate them,
    e.g. ``a, b, and c``.  Each item is surrounded by ``quote`` if given.
    """
    words = [f"{quote}{x}{quote}" if quote is not None else x for x in items]
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return ", ".join(words[:-1]) + conj + words[-1]
