"""
Pretty printer: type-directed rendering of arbitrary values into indented text.

Dispatch for a value, in order:
    - None → ``null`` (``(<type>) null`` at top level or for annotated members)
    - type descriptors → the ``type`` renderer (type name formatter)
    - PrettyPrintable instances → ``value.to_pretty_string()``
    - registered renderer of the class or a base class → its result verbatim
    - KeyValue → ``[<key>] = <value>``
    - iterables → ``<type>[<count>] { ... }``, mappings drained as KeyValue entries
    - everything else → the object's own ``__str__``/``__repr__`` if it defines one,
      else its data members as ``<module.Type> { name = value, ... }``

Examples:
    >>> pretty_string([1, 2])
    'list[2] {\\n\\t1, \\n\\t2\\n}'
    >>> pretty_string({"a": None})
    'dict[1] { ["a"] = (object) null }'
    >>> pretty_string(None, list[int])
    '(list<int>) null'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import inspect
from dataclasses import dataclass
from typing import IO, Any, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .config import PrettyOptions, get_options
from .registry import DEFAULT_REGISTRY, PrettyPrintable, Renderer, RendererRegistry, pretty_printer
from .typenames import array_element_type, fmt_type_name, is_type_descriptor
from .utils import class_name


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class KeyValue:
    """
    A key/value pair rendered as ``[<key>] = <value>``.

    Mapping entries are wrapped into KeyValue when a mapping is rendered.
    Unpacks like a 2-tuple: ``key, value = kv``.
    """
    key: Any
    value: Any

    def __iter__(self) -> Iterator[Any]:
        yield self.key
        yield self.value


class PrettyRenderer:
    """
    Renders values into indented text using a renderer registry and options.

    Args:
        registry: Registry with user renderers, DEFAULT_REGISTRY if None. Built-in renderers
            (str, bytes, bytearray, type) apply to classes the registry does not cover.
            The registry is frozen on the first render call.
        options: Rendering options. If None, the module-level options from
            config.get_options() are read on every render call.
    """

    def __init__(self, registry: RendererRegistry | None = None, options: PrettyOptions | None = None) -> None:
        self._registry = DEFAULT_REGISTRY if registry is None else registry
        self._options = options

    @property
    def options(self) -> PrettyOptions:
        return self._options if self._options is not None else get_options()

    @property
    def registry(self) -> RendererRegistry:
        return self._registry

    def render(self, value: Any, static_type: Any = object) -> str:
        """
        Render value into a pretty string.

        Args:
            value: Any object.
            static_type: Type shown when value is None, e.g. ``(list<int>) null``.
        """
        if not self._registry.frozen:
            self._registry.freeze()

        opt = self.options
        if value is None:
            return _fmt_null(static_type, opt)
        return self._render(value, opt)

    def print(self, value: Any, static_type: Any = object, *, file: IO[str] | None = None) -> None:
        """Render value and write it as one line to file, sys.stdout if None."""
        print(self.render(value, static_type), file=file)

    def _lookup(self, cls: type) -> Renderer | None:
        return self._registry.lookup(cls) or BUILTIN_REGISTRY.lookup(cls)

    def _render(self, obj: Any, opt: PrettyOptions) -> str:
        if obj is None:
            return opt.null_text

        if is_type_descriptor(obj):
            renderer = self._lookup(type)
            return renderer(obj) if renderer is not None else fmt_type_name(obj)

        if isinstance(obj, PrettyPrintable):
            return obj.to_pretty_string()

        renderer = self._lookup(type(obj))
        if renderer is not None:
            return renderer(obj)

        if isinstance(obj, KeyValue):
            return f"[{self._render_nullable(obj.key, object, opt)}] = {self._render_nullable(obj.value, object, opt)}"

        if isinstance(obj, abc.Iterable):
            return self._render_iterable(obj, opt)

        return self._render_object(obj, opt)

    def _render_nullable(self, obj: Any, static_type: Any, opt: PrettyOptions) -> str:
        if obj is None:
            return _fmt_null(static_type, opt)
        return self._render(obj, opt)

    def _render_iterable(self, obj: abc.Iterable, opt: PrettyOptions) -> str:
        if isinstance(obj, abc.Mapping):
            items = [KeyValue(k, v) for k, v in obj.items()]
        else:
            items = list(obj)

        array_type = array_element_type(obj)
        prefix_type = array_type.element if array_type is not None else getattr(obj, "__orig_class__", type(obj))
        prefix = f"{self._render(prefix_type, opt)}[{len(items)}]"

        if len(items) == 0:
            return prefix
        if len(items) == 1:
            return f"{prefix} {{ {self._render(items[0], opt)} }}"
        body = ", \n".join(_indent(self._render(item, opt), opt.indent) for item in items)
        return f"{prefix} {{\n{body}\n}}"

    def _render_object(self, obj: Any, opt: PrettyOptions) -> str:
        cls = type(obj)
        if cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__:
            return str(obj)

        annotations = inspect.get_annotations(cls)
        entries = [
            f"{name} = {self._render_nullable(value, annotations.get(name, object), opt)}"
            for name, value in _own_members(obj)
        ]
        prefix = class_name(obj, fully_qualified=True) + " {"

        if len(entries) == 0:
            return prefix + " }" if opt.close_empty_objects else prefix
        if len(entries) == 1:
            return f"{prefix} {entries[0]} }}"
        body = ", \n".join(_indent(entry, opt.indent) for entry in entries)
        return f"{prefix}\n{body}\n}}"


# Built-in renderers ---------------------------------------------------------------------------------------------------

BUILTIN_REGISTRY = RendererRegistry()

_STR_ESCAPES = {
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\\": "\\\\",
    '"': '\\"',
}


@pretty_printer(registry=BUILTIN_REGISTRY)
def render_str(value: str) -> str:
    """
    Double-quoted string with escapes.

    Control characters and code points up to 0xff outside printable ASCII become ``\\xNN``,
    code points above 0xff become ``\\uNNNN`` or ``\\UNNNNNNNN``.
    """
    return '"' + "".join(_escape_char(c) for c in value) + '"'


@pretty_printer(registry=BUILTIN_REGISTRY)
def render_bytes(value: bytes) -> str:
    return repr(value)


@pretty_printer(bytearray, registry=BUILTIN_REGISTRY)
def render_bytearray(value: bytearray) -> str:
    return repr(value)


@pretty_printer(registry=BUILTIN_REGISTRY)
def render_type(value: type) -> str:
    return fmt_type_name(value)


BUILTIN_REGISTRY.freeze()

_default_renderer = PrettyRenderer()


# Methods --------------------------------------------------------------------------------------------------------------

def pretty_string(value: Any, static_type: Any = object) -> str:
    """
    Render value into a pretty string with the default registry and module options.

    Args:
        value: Any object.
        static_type: Type shown when value is None, ``object`` by default.

    Returns:
        str: The rendered text, possibly multi-line.

    Examples:
        >>> pretty_string("a\\tb")
        '"a\\\\tb"'
        >>> pretty_string([])
        'list[0]'
        >>> pretty_string(None, str)
        '(str) null'
    """
    return _default_renderer.render(value, static_type)


def pretty_print(value: Any, static_type: Any = object, *, file: IO[str] | None = None) -> None:
    """Render value with pretty_string() and write it followed by a newline to file (stdout if None)."""
    _default_renderer.print(value, static_type, file=file)


# Private Methods ------------------------------------------------------------------------------------------------------

def _escape_char(c: str) -> str:
    if c in _STR_ESCAPES:
        return _STR_ESCAPES[c]
    code = ord(c)
    if code < 0x20 or 0x7F <= code <= 0xFF:
        return f"\\x{code:02x}"
    if code > 0xFFFF:
        return f"\\U{code:08x}"
    if code > 0xFF:
        return f"\\u{code:04x}"
    return c


def _fmt_null(static_type: Any, opt: PrettyOptions) -> str:
    return f"({fmt_type_name(static_type)}) {opt.null_text}"


def _indent(text: str, indent: str) -> str:
    """Prefix every line with indent; multi-line text is stripped first."""
    if "\n" in text:
        return "\n".join(indent + line for line in text.strip().split("\n"))
    return indent + text


def _own_members(obj: Any) -> list[tuple[str, Any]]:
    """Instance __dict__ entries followed by the set __slots__ of the object's own class."""
    cls = type(obj)
    members = list(vars(obj).items()) if hasattr(obj, "__dict__") else []

    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    for name in slots:
        if name in ("__dict__", "__weakref__"):
            continue
        attr = name
        if name.startswith("__") and not name.endswith("__"):
            attr = f"_{cls.__name__.lstrip('_')}{name}"
        try:
            value = cls.__dict__[attr].__get__(obj, cls)
        except AttributeError:
            # unset slot
            continue
        members.append((name, value))
    return members
