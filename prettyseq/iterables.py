"""
Prettyseq sequence helpers

LINQ-style functions over iterables: indexing, dict building, grouping,
flattening, arg-max, integer ranges, repeat-N-times and for-each with an
optional parallel fan-out.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import inspect
import itertools
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Hashable, Iterable, Iterator, TypeVar, overload

# Local ----------------------------------------------------------------------------------------------------------------
from .pretty import KeyValue
from .utils import class_name

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


# Methods --------------------------------------------------------------------------------------------------------------

def arg_max(iterable: Iterable[T], key: Callable[[T], Any] | None = None) -> int:
    """
    Return the zero-based position of the maximal element.

    Ties resolve to the first occurrence. With key, elements are compared by key(element).

    Raises:
        ValueError: If iterable is empty.

    Examples:
        >>> arg_max([0, 1, 1])
        1
        >>> arg_max([(0, "a"), (2, "b")], key=lambda x: x[0])
        1
    """
    best_index = -1
    best = None
    for index, item in enumerate(iterable):
        k = key(item) if key is not None else item
        if best_index < 0 or k > best:
            best_index, best = index, k

    if best_index < 0:
        raise ValueError("arg_max() arg is an empty iterable")
    return best_index


def flatten(iterables: Iterable[Iterable[T]]) -> Iterator[T]:
    """Flatten one level of nesting, preserving order."""
    return itertools.chain.from_iterable(iterables)


def for_each(iterable: Iterable[T], action: Callable[[T], Any], *,
             parallel: bool = False,
             max_workers: int | None = None) -> None:
    """
    Call action once per element.

    Sequential mode visits elements in iteration order. Parallel mode submits every
    element to a thread pool: elements are visited exactly once in no particular order,
    and the call returns only after all actions completed. The action must be thread-safe.

    Args:
        iterable: Elements to visit.
        action: Callable receiving one element; its result is discarded.
        parallel: Fan out to worker threads.
        max_workers: Thread pool size in parallel mode, executor default if None.

    Raises:
        Exception: In parallel mode, the first exception raised by an action (in completion order),
            re-raised after all workers finished. In sequential mode exceptions propagate immediately.
    """
    if not parallel:
        for item in iterable:
            action(item)
        return

    first_error: BaseException | None = None
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(action, item) for item in iterable]
        for future in as_completed(futures):
            error = future.exception()
            if error is not None and first_error is None:
                first_error = error

    if first_error is not None:
        raise first_error


def group_by(iterable: Iterable[T], key: Callable[[T], K],
             value: Callable[[T], V] | None = None) -> dict[K, tuple]:
    """
    Group elements into a dict of tuples keyed by key(element).

    Keys keep first-seen order, tuples keep original element order.
    With value, each element is projected through value(element).

    Examples:
        >>> group_by([(10, "Alice"), (5, "Bob"), (5, "Charlie")], key=lambda x: x[0], value=lambda x: x[1])
        {10: ('Alice',), 5: ('Bob', 'Charlie')}
    """
    return {k: tuple(v) for k, v in group_by_lists(iterable, key, value).items()}


def group_by_lists(iterable: Iterable[T], key: Callable[[T], K],
                   value: Callable[[T], V] | None = None) -> dict[K, list]:
    """Same as group_by() but groups are growable lists."""
    groups: dict[K, list] = {}
    for item in iterable:
        groups.setdefault(key(item), []).append(value(item) if value is not None else item)
    return groups


def index_by(iterable: Iterable[T], key: Callable[[T], K],
             value: Callable[[T], V] | None = None) -> dict[K, Any]:
    """Map key(element) to the last element with that key, or to its value(element) projection."""
    return {key(item): (value(item) if value is not None else item) for item in iterable}


def indexed(iterable: Iterable[T], start: int = 0) -> Iterator[tuple[int, T]]:
    """Pair each element with its position: (0, a), (1, b), ..."""
    return enumerate(iterable, start)


@overload
def int_range(end: int, /) -> range: ...


@overload
def int_range(start: int, end: int, /) -> range: ...


@overload
def int_range(start: int, end: int, step: int, /) -> range: ...


@overload
def int_range(bounds: tuple[int, ...], /) -> range: ...


def int_range(*bounds) -> range:
    """
    Arithmetic sequence of integers from end, (start, end) or (start, end, step).

    Bounds may also be given as a single tuple. End is exclusive.

    Raises:
        TypeError: If bounds count is not 1 to 3 or a bound is not an int.
        ValueError: If step is zero.

    Examples:
        >>> list(int_range(5))
        [0, 1, 2, 3, 4]
        >>> list(int_range((3, 6)))
        [3, 4, 5]
        >>> list(int_range(0, 16, 5))
        [0, 5, 10, 15]
    """
    if len(bounds) == 1 and isinstance(bounds[0], tuple):
        bounds = bounds[0]

    if not 1 <= len(bounds) <= 3:
        raise TypeError(f"int_range() expects 1 to 3 bounds, got {len(bounds)}")
    for bound in bounds:
        if not isinstance(bound, int) or isinstance(bound, bool):
            raise TypeError(f"int_range() bounds must be int, got {class_name(bound)}: {bound!r}")
    if len(bounds) == 3 and bounds[2] == 0:
        raise ValueError("int_range() step must not be zero")

    return range(*bounds)


def times(n: int, action: Callable[..., T], *,
          collect: bool = False,
          with_index: bool | None = None) -> list[T] | None:
    """
    Call action n times.

    Args:
        n: Number of calls, non-negative.
        action: Callable taking no arguments or the 0-based call index.
        collect: Return the list of results if True, else None.
        with_index: Pass the call index to action. If None, the index is passed
            when action has a required positional parameter.

    Raises:
        TypeError: If n is not an int.
        ValueError: If n is negative.

    Examples:
        >>> sum(times(1000, lambda i: i, collect=True))
        499500
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"times() count must be int, got {class_name(n)}: {n!r}")
    if n < 0:
        raise ValueError(f"times() count must be non-negative, got {n}")

    if with_index is None:
        with_index = _accepts_index(action)

    results: list[T] | None = [] if collect else None
    for i in range(n):
        result = action(i) if with_index else action()
        if results is not None:
            results.append(result)
    return results


def to_dict(iterable: Iterable[Any], key: Callable[[Any], K] | None = None,
            value: Callable[[Any], V] | None = None) -> dict:
    """
    Build a dict from pairs or records; the last duplicate key wins.

    Without key, every item must be a KeyValue, a 2-sequence (key, value), or a longer
    sequence (key, *rest) which maps key to the tuple of the remaining fields.
    With key, items are arbitrary records mapped to value(item), or to the item itself.

    Raises:
        TypeError: If an item cannot be split into key and value, or value is given without key.

    Examples:
        >>> to_dict([("Alice", 10), ("Bob", 5)])
        {'Alice': 10, 'Bob': 5}
        >>> to_dict([("Alice", 10, "A")])
        {'Alice': (10, 'A')}
    """
    if key is None:
        if value is not None:
            raise TypeError("to_dict() value selector requires a key selector")
        return dict(_split_record(item) for item in iterable)

    return index_by(iterable, key, value)


# Private Methods ------------------------------------------------------------------------------------------------------

def _accepts_index(action: Callable) -> bool:
    """True if action has a required positional parameter."""
    try:
        sig = inspect.signature(action)
    except (TypeError, ValueError):
        # No introspectable signature, e.g. some builtins
        return False
    return any(
        p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and p.default is inspect.Parameter.empty
        for p in sig.parameters.values()
    )


def _split_record(item: Any) -> tuple[Any, Any]:
    if isinstance(item, KeyValue):
        return item.key, item.value
    if isinstance(item, abc.Sequence) and not isinstance(item, (str, bytes, bytearray)):
        if len(item) == 2:
            return item[0], item[1]
        if len(item) > 2:
            return item[0], tuple(item[1:])
    raise TypeError(f"to_dict() items must be key/value pairs or records, got {class_name(item)}: {item!r}")
