from typing import Any

BACKQUOTE = "`"

OPTIONAL_MODIFIER = "optional"

DEFAULT_PLAIN_VALUE_TYPES: tuple[type[Any], ...] = (
    int,
    str,
    float,
    complex,
    bool,
    bytes,
    bytearray,
    list,
    dict,
    set,
    frozenset,
    tuple,
    range,
)
