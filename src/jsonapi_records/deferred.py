import inspect
import typing

T = typing.TypeVar("T")


class Resolution(typing.Generic[T]):
    """
    A :py:class:`Resolution` encapsulates the outcome of a caller-supplied hook,
    which is either an immediate value or an awaitable that yields the value later.

    Calling the object returns the immediate value; awaiting :py:meth:`wait`
    yields the value in either case.

    :param Union[T, Awaitable[T]] outcome: the value returned by the hook.
    """

    _value: typing.Optional[T] = None
    _pending: typing.Optional[typing.Awaitable[T]] = None

    @property
    def immediate(self) -> bool:
        return self._pending is None

    def __call__(self) -> T:
        if self._pending is not None:
            raise RuntimeError("value is not resolved yet")
        return typing.cast(T, self._value)

    async def wait(self) -> T:
        if self._pending is not None:
            self._value = await self._pending
            self._pending = None
        return typing.cast(T, self._value)

    def discard(self) -> None:
        """
        Releases a pending value that is never going to be awaited.
        """
        if self._pending is not None and inspect.iscoroutine(self._pending):
            self._pending.close()
        self._pending = None

    def __init__(self, outcome: typing.Union[T, typing.Awaitable[T]]):
        if inspect.isawaitable(outcome):
            self._pending = typing.cast(typing.Awaitable[T], outcome)
        else:
            self._value = typing.cast(T, outcome)


def run_immediately(awaitable: typing.Coroutine[typing.Any, typing.Any, T]) -> T:
    """
    Drives a coroutine that is expected to finish without ever suspending,
    and returns its result.

    :raises RuntimeError: if the coroutine suspends.
    """
    try:
        awaitable.send(None)
    except StopIteration as e:
        return typing.cast(T, e.value)
    awaitable.close()
    raise RuntimeError("coroutine suspended where an immediate result was expected")
