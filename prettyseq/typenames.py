"""
Type name formatting for pretty output.

Renders type descriptors (classes, parameterized generics, unions and array
descriptors) into a short conventional form, e.g. ``dict<str, int>``,
``int[,]`` or ``OrderedDict<str, list<int>>``.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import types
import typing
from dataclasses import dataclass
from typing import Any, Final, Mapping, get_args, get_origin

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

UNION_TYPES = (typing.Union, types.UnionType)

# Fully-qualified names as produced by class_name(tp, fully_qualified=True) -> short alias
TYPE_ALIASES: Final[Mapping[str, str]] = frozendict({
    "NoneType": "None",
    "array.array": "array",
    "collections.ChainMap": "ChainMap",
    "collections.Counter": "Counter",
    "collections.OrderedDict": "OrderedDict",
    "collections.defaultdict": "defaultdict",
    "collections.deque": "deque",
    "collections.abc.Callable": "Callable",
    "collections.abc.Collection": "Collection",
    "collections.abc.Generator": "Generator",
    "collections.abc.Iterable": "Iterable",
    "collections.abc.Iterator": "Iterator",
    "collections.abc.Mapping": "Mapping",
    "collections.abc.MutableMapping": "MutableMapping",
    "collections.abc.MutableSequence": "MutableSequence",
    "collections.abc.Sequence": "Sequence",
    "collections.abc.Set": "Set",
    "ctypes.c_byte": "int8",
    "ctypes.c_int": "int32",
    "ctypes.c_longlong": "int64",
    "ctypes.c_short": "int16",
    "ctypes.c_ubyte": "uint8",
    "ctypes.c_uint": "uint32",
    "ctypes.c_ulonglong": "uint64",
    "ctypes.c_ushort": "uint16",
    "ctypes.c_void_p": "nint",
    "datetime.date": "date",
    "datetime.datetime": "datetime",
    "datetime.timedelta": "timedelta",
    "decimal.Decimal": "Decimal",
    "fractions.Fraction": "Fraction",
    "typing.Any": "Any",
    "uuid.UUID": "UUID",
})

# array.array typecode -> Python element type
_ARRAY_TYPECODES: Final[Mapping[str, type]] = frozendict({
    "b": int, "B": int, "h": int, "H": int, "i": int, "I": int,
    "l": int, "L": int, "q": int, "Q": int,
    "f": float, "d": float,
    "u": str, "w": str,
})


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class ArrayType:
    """
    Descriptor of a homogeneous array: element type plus number of dimensions.

    Python has no array types with a rank, so this descriptor stands in for
    them wherever an element type is known, e.g. for ``array.array`` values.
    """
    element: Any
    rank: int = 1

    def __post_init__(self):
        if not isinstance(self.rank, int) or self.rank < 1:
            raise ValueError(f"array rank must be a positive int, got {self.rank!r}")


# Methods --------------------------------------------------------------------------------------------------------------

def array_element_type(value: Any) -> ArrayType | None:
    """Return the ArrayType of an ``array.array`` value, None for anything else."""
    if isinstance(value, array.array):
        return ArrayType(_ARRAY_TYPECODES.get(value.typecode, int))
    return None


def fmt_type_name(tp: Any) -> str:
    """
    Format a type descriptor into a short readable name.

    Rules:
        - ArrayType: ``<element>[<rank-1 commas>]``, so rank 1 is ``int[]`` and rank 3 is ``int[,,]``.
        - Unions: members joined with `` | ``.
        - Parameterized generics: ``<base><<args>>`` with args separated by ``, ``.
        - Classes: module-qualified name (builtins unqualified) remapped through TYPE_ALIASES.
        - Anything else: ``str(tp)``.

    Examples:
        >>> fmt_type_name(dict[str, int])
        'dict<str, int>'
        >>> fmt_type_name(ArrayType(int, rank=2))
        'int[,]'
        >>> fmt_type_name(collections.OrderedDict)
        'OrderedDict'
    """
    if isinstance(tp, ArrayType):
        return f"{fmt_type_name(tp.element)}[{',' * (tp.rank - 1)}]"

    origin = get_origin(tp)
    if origin in UNION_TYPES:
        return " | ".join(_fmt_type_arg(arg) for arg in get_args(tp))

    if origin is not None:
        base = rename_type(class_name(origin, fully_qualified=True)) if isinstance(origin, type) else str(origin)
        args = get_args(tp)
        if not args:
            return base
        return f"{base}<{', '.join(_fmt_type_arg(arg) for arg in args)}>"

    if isinstance(tp, type):
        return rename_type(class_name(tp, fully_qualified=True))

    return str(tp)


def is_type_descriptor(obj: Any) -> bool:
    """True for classes, parameterized generics, unions and ArrayType descriptors."""
    return isinstance(obj, (type, ArrayType)) or get_origin(obj) is not None


def rename_type(name: str) -> str:
    """Map a fully-qualified type name to its short alias; unknown names pass through."""
    return TYPE_ALIASES.get(name, name)


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_type_arg(arg: Any) -> str:
    if arg is Ellipsis:
        return "..."
    if arg is None:
        return "None"
    if isinstance(arg, list):
        # Callable[[int, str], bool] argument list
        return "[" + ", ".join(_fmt_type_arg(a) for a in arg) + "]"
    if isinstance(arg, (typing.TypeVar, typing.ParamSpec)):
        return arg.__name__
    if is_type_descriptor(arg):
        return fmt_type_name(arg)
    return repr(arg)
