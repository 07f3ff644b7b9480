"""
Prettyseq rendering options.

Module-level options used by the default renderer, with named presets:

    >>> configure(preset="python")
    >>> configure(indent="  ")          # merge into the current options
    >>> get_options().indent
    '  '
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, fields, replace as dataclasses_replace
from typing import Any, Literal, Self

# Classes --------------------------------------------------------------------------------------------------------------

Preset = Literal["default", "python"]


@dataclass(frozen=True)
class PrettyOptions:
    """
    Options of the pretty renderer.

    Attributes:
        indent: Prefix added to every line of a nested multi-line block.
        null_text: Text rendered for a nested None value.
        close_empty_objects: If True, objects without data members render as ``Type { }``
            instead of the legacy unterminated ``Type {`` form.
    """
    indent: str = "\t"
    null_text: str = "null"
    close_empty_objects: bool = False

    def __post_init__(self):
        if not isinstance(self.indent, str):
            raise TypeError(f"indent must be a str, got {type(self.indent).__name__}")
        if not isinstance(self.null_text, str):
            raise TypeError(f"null_text must be a str, got {type(self.null_text).__name__}")

    @classmethod
    def default(cls) -> Self:
        """Tab indent, ``null`` for missing values, legacy empty-object form."""
        return cls()

    @classmethod
    def python(cls) -> Self:
        """Four-space indent, ``None`` for missing values, closed empty objects."""
        return cls(indent="    ", null_text="None", close_empty_objects=True)

    def merge(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced."""
        names = {f.name for f in fields(self)}
        unknown = set(kwargs) - names
        if unknown:
            raise TypeError(f"unknown PrettyOptions field(s): {', '.join(sorted(unknown))}")
        return dataclasses_replace(self, **kwargs)


_PRESETS = {
    "default": PrettyOptions.default,
    "python": PrettyOptions.python,
}

_options: PrettyOptions = PrettyOptions()


# Methods --------------------------------------------------------------------------------------------------------------

def configure(preset: Preset | None = None, **overrides: Any) -> None:
    """
    Update the module-level rendering options.

    Args:
        preset: Reset to a named preset before applying overrides. If None,
            overrides are merged into the current options.
        **overrides: PrettyOptions fields to replace.

    Raises:
        ValueError: If preset is unknown.
        TypeError: If an override names an unknown field or has a wrong type.
    """
    global _options

    if preset is None:
        base = _options
    elif preset in _PRESETS:
        base = _PRESETS[preset]()
    else:
        raise ValueError(f"unknown preset {preset!r}, expected one of: {', '.join(_PRESETS)}")

    _options = base.merge(**overrides)


def get_options() -> PrettyOptions:
    """Return the current module-level rendering options."""
    return _options
