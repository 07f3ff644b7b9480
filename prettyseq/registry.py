"""
Renderer registry for the pretty printer.

Renderers are plain functions ``fn(value) -> str`` bound to a class. They are
registered explicitly, typically with the decorator at import time:

    >>> @pretty_printer
    ... def render_point(p: Point) -> str:
    ...     return f"({p.x}, {p.y})"

Types may instead render themselves by implementing the PrettyPrintable protocol.

A registry is frozen into an immutable mapping on first use by a renderer,
after which lookups need no locking and further registration is rejected.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import threading
import warnings
from typing import Any, Callable, Mapping, Protocol, get_type_hints, runtime_checkable

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .typenames import fmt_type_name

Renderer = Callable[[Any], str]


# Classes --------------------------------------------------------------------------------------------------------------

class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that is already in use."""


@runtime_checkable
class PrettyPrintable(Protocol):
    """Protocol for self-describing types which render their own pretty string."""

    def to_pretty_string(self) -> str:
        ...


class RendererRegistry:
    """
    Mapping of classes to renderer functions.

    - Last registration for a class wins; replacing a renderer issues a RuntimeWarning.
    - lookup() walks the MRO of the class, so a renderer for a base class also serves its subclasses.
    - freeze() returns an immutable frozendict snapshot and closes the registry for writes.
    """

    def __init__(self, renderers: Mapping[type, Renderer] | None = None) -> None:
        self._renderers: dict[type, Renderer] = {}
        self._frozen: frozendict | None = None
        self._lock = threading.Lock()
        for tp, fn in (renderers or {}).items():
            self.register(tp, fn)

    def __contains__(self, tp: Any) -> bool:
        return tp in self._renderers

    def __len__(self) -> int:
        return len(self._renderers)

    def __repr__(self) -> str:
        names = ", ".join(fmt_type_name(tp) for tp in self._renderers)
        state = "frozen" if self.frozen else "open"
        return f"RendererRegistry({state}: {names})"

    @property
    def frozen(self) -> bool:
        return self._frozen is not None

    def register(self, tp: type, fn: Renderer) -> Renderer:
        """
        Bind renderer fn to class tp and return fn.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
            TypeError: If tp is not a class or fn is not callable.
        """
        if not isinstance(tp, type):
            raise TypeError(f"renderer target must be a class, got {tp!r}")
        if not callable(fn):
            raise TypeError(f"renderer must be callable, got {type(fn).__name__}")

        # The frozen check and the write must not interleave with freeze()
        with self._lock:
            if self._frozen is not None:
                raise RegistryFrozenError(
                    f"cannot register renderer for {fmt_type_name(tp)}: registry is frozen"
                )
            old = self._renderers.get(tp)
            self._renderers[tp] = fn

        if old is not None and old is not fn:
            warnings.warn(
                f"renderer for {fmt_type_name(tp)} replaced: "
                f"{getattr(old, '__qualname__', old)!s} -> {getattr(fn, '__qualname__', fn)!s}",
                RuntimeWarning,
                stacklevel=3,
            )
        return fn

    def freeze(self) -> Mapping[type, Renderer]:
        """Return the immutable snapshot of registered renderers, freezing the registry."""
        with self._lock:
            if self._frozen is None:
                self._frozen = frozendict(self._renderers)
            return self._frozen

    def lookup(self, cls: type) -> Renderer | None:
        """Return the renderer of cls or of its nearest registered base class, None if absent."""
        renderers = self._frozen if self._frozen is not None else self._renderers
        for base in cls.__mro__:
            fn = renderers.get(base)
            if fn is not None:
                return fn
        return None


DEFAULT_REGISTRY = RendererRegistry()


# Methods --------------------------------------------------------------------------------------------------------------

def pretty_printer(target: Any = None, *, registry: RendererRegistry | None = None) -> Any:
    """
    Decorator registering a function as the renderer of a class.

    Usage:
        - ``@pretty_printer``: the target class is the annotation of the single positional parameter.
        - ``@pretty_printer(SomeType)``: explicit target class.
        - ``@pretty_printer(registry=reg)``: register into a registry other than DEFAULT_REGISTRY.

    Staticmethods are accepted, the underlying function gets registered.
    The decorated object is returned unchanged.

    Raises:
        TypeError: If the target class cannot be determined from the function signature.
        RegistryFrozenError: If the registry is already frozen.
    """
    reg = DEFAULT_REGISTRY if registry is None else registry

    def decorator(fn, tp=None):
        func = fn.__func__ if isinstance(fn, staticmethod) else fn
        reg.register(tp if tp is not None else _param_type(func), func)
        return fn

    if target is None:
        return decorator

    if isinstance(target, type):
        return lambda fn: decorator(fn, target)

    if callable(target) or isinstance(target, staticmethod):
        return decorator(target)

    raise TypeError(f"pretty_printer target must be a class or a function, got {target!r}")


# Private Methods ------------------------------------------------------------------------------------------------------

def _param_type(fn: Callable) -> type:
    """Class annotation of the single positional parameter of fn."""
    name = getattr(fn, "__qualname__", repr(fn))
    params = [
        p for p in inspect.signature(fn).parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if len(params) != 1:
        raise TypeError(f"renderer {name} must take exactly one positional parameter, got {len(params)}")

    try:
        hints = get_type_hints(fn)
    except NameError as e:
        raise TypeError(f"cannot resolve parameter annotation of renderer {name}: {e}") from e

    tp = hints.get(params[0].name)
    if not isinstance(tp, type):
        raise TypeError(
            f"renderer {name} parameter {params[0].name!r} must be annotated with a class, got {tp!r}"
        )
    return tp
