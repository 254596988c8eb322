import re
from pathlib import Path, PurePosixPath
from typing import Optional, Tuple

from trellis.spec import Operation, OperationKind, ParsedLine

SPACES_PER_LEVEL = 4

# (source) > target  |  (source)
_MOVE_PATTERN = re.compile(r"\((.+?)\)(?:\s*>\s*(.+))?")
# [source] > target  |  [source]
_COPY_PATTERN = re.compile(r"\[(.+?)\](?:\s*>\s*(.+))?")


def measure_indent(raw_line: str) -> Tuple[int, bool]:
    """
    Returns (level, ragged). A tab anywhere in the indentation switches to
    tab counting; otherwise every four spaces make one level and leftover
    spaces are dropped (ragged=True).
    """
    body = raw_line.lstrip()
    indentation = raw_line[: len(raw_line) - len(body)]
    if "\t" in indentation:
        return indentation.count("\t"), False
    width = len(indentation)
    return width // SPACES_PER_LEVEL, width % SPACES_PER_LEVEL != 0


def expand_home(source: str, home_dir: Optional[Path] = None) -> Path:
    if not source.startswith("~"):
        return Path(source)
    home = home_dir if home_dir is not None else Path.home()
    rest = source[1:].lstrip("/\\")
    return home / rest if rest else home


def _relative_name(text: str) -> str:
    # Entry names always land under the current directory.
    return text.strip().lstrip("/\\")


def has_file_extension(name: str) -> bool:
    segment = PurePosixPath(name).name
    dot = segment.rfind(".")
    return 0 < dot < len(segment) - 1


def _match_transfer(
    pattern: "re.Pattern[str]",
    kind: OperationKind,
    text: str,
    home_dir: Optional[Path],
) -> Optional[Operation]:
    match = pattern.fullmatch(text)
    if not match:
        return None
    raw_source = match.group(1).strip()
    if not raw_source:
        return None

    source_path = expand_home(raw_source, home_dir)
    if match.group(2) is not None:
        name = _relative_name(match.group(2))
    else:
        name = source_path.name
    if not name:
        return None
    return Operation(kind=kind, name=name, source_path=source_path)


def parse_operation(text: str, home_dir: Optional[Path] = None) -> Optional[Operation]:
    """
    Parses trimmed line content. Move and copy forms are tried first;
    anything that does not match them is a plain entry. Returns None only
    when nothing usable is left as a name.
    """
    text = text.strip()
    if not text:
        return None

    operation = _match_transfer(_MOVE_PATTERN, OperationKind.MOVE, text, home_dir)
    if operation:
        return operation
    operation = _match_transfer(_COPY_PATTERN, OperationKind.COPY, text, home_dir)
    if operation:
        return operation

    explicit_dir = text.endswith("/")
    name = _relative_name(text).rstrip("/\\")
    if not name:
        return None
    if not explicit_dir and has_file_extension(name):
        return Operation(kind=OperationKind.CREATE_FILE, name=name)
    return Operation(kind=OperationKind.CREATE_DIRECTORY, name=name)


def parse_line(raw_line: str, home_dir: Optional[Path] = None) -> ParsedLine:
    level, ragged = measure_indent(raw_line)
    operation = parse_operation(raw_line, home_dir)
    return ParsedLine(level=level, operation=operation, ragged_indent=ragged)


class LineParser:
    """Binds the home directory used for `~` so parsing stays deterministic."""

    def __init__(self, home_dir: Optional[Path] = None):
        self.home_dir = home_dir

    def parse(self, raw_line: str) -> ParsedLine:
        return parse_line(raw_line, self.home_dir)
