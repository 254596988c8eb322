from .line import (
    LineParser,
    expand_home,
    has_file_extension,
    measure_indent,
    parse_line,
    parse_operation,
)

__all__ = [
    "LineParser",
    "expand_home",
    "has_file_extension",
    "measure_indent",
    "parse_line",
    "parse_operation",
]
