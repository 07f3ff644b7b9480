#
# Prettyseq - Type Names Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections
import ctypes
import typing
from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import TypeVar

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from prettyseq.typenames import (
    TYPE_ALIASES,
    ArrayType,
    array_element_type,
    fmt_type_name,
    is_type_descriptor,
    rename_type,
)

T = TypeVar("T")


class UserType:
    pass


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtTypeName:
    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(int, "int", id="int"),
            pytest.param(str, "str", id="str"),
            pytest.param(type(None), "None", id="none-type"),
            pytest.param(collections.OrderedDict, "OrderedDict", id="ordered-dict"),
            pytest.param(collections.deque, "deque", id="deque"),
            pytest.param(Decimal, "Decimal", id="decimal"),
            pytest.param(ctypes.c_void_p, "nint", id="pointer-sized"),
            pytest.param(ctypes.c_ubyte, "uint8", id="ctypes-ubyte"),
            pytest.param(typing.Any, "Any", id="any"),
        ],
    )
    def test_plain_types(self, tp, expected):
        """Remap well-known qualified names to short aliases."""
        assert fmt_type_name(tp) == expected

    def test_user_type_passes_through(self):
        """Names missing in the alias table stay fully qualified."""
        assert fmt_type_name(UserType) == f"{UserType.__module__}.UserType"

    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(dict[str, int], "dict<str, int>", id="dict"),
            pytest.param(typing.Dict[str, int], "dict<str, int>", id="typing-dict"),
            pytest.param(typing.List[int], "list<int>", id="typing-list"),
            pytest.param(list[dict[str, list[int]]], "list<dict<str, list<int>>>", id="nested"),
            pytest.param(tuple[int, ...], "tuple<int, ...>", id="variadic-tuple"),
            pytest.param(Iterable[str], "Iterable<str>", id="abc-iterable"),
            pytest.param(collections.OrderedDict[str, int], "OrderedDict<str, int>", id="ordered-dict"),
            pytest.param(Callable[[int, str], bool], "Callable<[int, str], bool>", id="callable"),
            pytest.param(list[T], "list<T>", id="typevar"),
        ],
    )
    def test_generics(self, tp, expected):
        """Format parameterized generics with angle brackets."""
        assert fmt_type_name(tp) == expected

    def test_generic_composes_components(self):
        """Formatting a generic equals composing the formatted arguments."""
        assert fmt_type_name(dict[str, int]) == f"dict<{fmt_type_name(str)}, {fmt_type_name(int)}>"

    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(int | None, "int | None", id="pipe"),
            pytest.param(typing.Optional[str], "str | None", id="optional"),
            pytest.param(typing.Union[int, list[str]], "int | list<str>", id="union"),
        ],
    )
    def test_unions(self, tp, expected):
        assert fmt_type_name(tp) == expected

    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(ArrayType(int), "int[]", id="rank-1"),
            pytest.param(ArrayType(int, rank=2), "int[,]", id="rank-2"),
            pytest.param(ArrayType(str, rank=3), "str[,,]", id="rank-3"),
            pytest.param(ArrayType(dict[str, int]), "dict<str, int>[]", id="generic-element"),
            pytest.param(ArrayType(ArrayType(int)), "int[][]", id="jagged"),
        ],
    )
    def test_arrays(self, tp, expected):
        """Arrays carry rank-1 commas inside the brackets."""
        assert fmt_type_name(tp) == expected

    def test_non_type_falls_back_to_str(self):
        assert fmt_type_name("Forward") == "Forward"


class TestArrayType:
    @pytest.mark.parametrize("rank", [0, -1, 1.5])
    def test_invalid_rank(self, rank):
        with pytest.raises(ValueError, match="rank"):
            ArrayType(int, rank=rank)

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(array.array("i", [1, 2]), ArrayType(int), id="int"),
            pytest.param(array.array("d"), ArrayType(float), id="float"),
            pytest.param([1, 2], None, id="list"),
        ],
    )
    def test_array_element_type(self, value, expected):
        assert array_element_type(value) == expected


class TestIsTypeDescriptor:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(int, True, id="class"),
            pytest.param(list[int], True, id="generic-alias"),
            pytest.param(int | None, True, id="union"),
            pytest.param(ArrayType(int), True, id="array-type"),
            pytest.param(5, False, id="int-value"),
            pytest.param("int", False, id="str-value"),
            pytest.param([int], False, id="list-of-types"),
        ],
    )
    def test_is_type_descriptor(self, obj, expected):
        assert is_type_descriptor(obj) is expected


class TestRenameType:
    def test_known_and_unknown(self):
        assert rename_type("collections.Counter") == "Counter"
        assert rename_type("my.module.Thing") == "my.module.Thing"

    def test_table_is_immutable(self):
        with pytest.raises(TypeError):
            TYPE_ALIASES["x"] = "y"
