from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

from fsi_driver.errors import (
    DuplicateParameterError,
    ParameterFormatError,
    UnknownParameterError,
)
from fsi_driver.utils import get_logger

logger = get_logger(__name__)

COMMENT_PREFIX = "#"
FIELD_SEPARATOR = ":"
LINE_ENDING = "\r\n"
BOM = "\ufeff"
BOM_ENCODING = "utf-8-sig"

ParameterValue = Union[float, str, int]


class ParameterType(str, Enum):
    FLOAT = "float"
    STRING = "string"
    INTEGER = "integer"


class LoadStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"


@dataclass
class ParameterTable:
    """Typed name/value tables read from a parameter file."""

    floats: Dict[str, float] = field(default_factory=dict)
    strings: Dict[str, str] = field(default_factory=dict)
    integers: Dict[str, int] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.floats or name in self.strings or name in self.integers

    def __len__(self) -> int:
        return len(self.floats) + len(self.strings) + len(self.integers)

    def get_float(self, name: str) -> float:
        try:
            return self.floats[name]
        except KeyError:
            raise UnknownParameterError(name, ParameterType.FLOAT.value) from None

    def get_string(self, name: str) -> str:
        try:
            return self.strings[name]
        except KeyError:
            raise UnknownParameterError(name, ParameterType.STRING.value) from None

    def get_int(self, name: str) -> int:
        try:
            return self.integers[name]
        except KeyError:
            raise UnknownParameterError(name, ParameterType.INTEGER.value) from None

    def type_of(self, name: str) -> ParameterType:
        if name in self.floats:
            return ParameterType.FLOAT
        if name in self.strings:
            return ParameterType.STRING
        if name in self.integers:
            return ParameterType.INTEGER
        raise UnknownParameterError(name)

    def items(self) -> Iterator[Tuple[str, ParameterType, ParameterValue]]:
        for name, value in self.floats.items():
            yield name, ParameterType.FLOAT, value
        for name, value in self.strings.items():
            yield name, ParameterType.STRING, value
        for name, value in self.integers.items():
            yield name, ParameterType.INTEGER, value

    def _put(self, kind: ParameterType, name: str, value: ParameterValue) -> None:
        if kind is ParameterType.FLOAT:
            self.floats[name] = float(value)
        elif kind is ParameterType.STRING:
            self.strings[name] = str(value)
        else:
            self.integers[name] = int(value)


@dataclass
class ParameterLoad:
    path: Path
    status: LoadStatus
    table: ParameterTable

    @property
    def missing(self) -> bool:
        return self.status is LoadStatus.MISSING


def load_parameters(path: Path) -> ParameterLoad:
    """Parse ``path`` into a :class:`ParameterTable`.

    An absent file is reported and yields an empty table with
    ``LoadStatus.MISSING``. Malformed lines raise ``ParameterFormatError``.
    """

    path = Path(path)
    if not path.exists():
        logger.warning("Parameter file not found: %s", path)
        return ParameterLoad(path=path, status=LoadStatus.MISSING, table=ParameterTable())

    table = ParameterTable()
    seen: Dict[str, int] = {}
    with path.open(encoding=BOM_ENCODING) as handle:
        for line_no, raw in enumerate(handle, start=1):
            if _is_passthrough(raw):
                continue
            name, kind, value = _parse_line(path, line_no, raw)
            if name in seen:
                raise DuplicateParameterError(path, line_no, name, seen[name])
            seen[name] = line_no
            table._put(kind, name, value)

    logger.debug("Loaded %d parameters from %s", len(table), path)
    return ParameterLoad(path=path, status=LoadStatus.OK, table=table)


def rewrite_parameter(path: Path, name: str, new_value: str) -> None:
    """Replace the value field of parameter ``name`` in place.

    Only the value token changes; comments, blank lines and every other
    parameter line are written back untouched. Lines end in CRLF and a
    leading byte-order mark is kept.
    """

    path = Path(path)
    with path.open(encoding="utf-8", newline="") as handle:
        text = handle.read()
    has_bom = text.startswith(BOM)
    lines = text[len(BOM):].splitlines() if has_bom else text.splitlines()

    replaced = False
    output: List[str] = []
    for line in lines:
        if not _is_passthrough(line) and _key_of(line) == name:
            line = _replace_value(line, new_value)
            replaced = True
        output.append(line)

    if not replaced:
        raise UnknownParameterError(name)

    with path.open("w", encoding=BOM_ENCODING if has_bom else "utf-8", newline="") as handle:
        handle.write("".join(line + LINE_ENDING for line in output))
    logger.debug("Set %s=%s in %s", name, new_value, path)


def format_parameter_line(name: str, kind: ParameterType, value: ParameterValue, note: str = "") -> str:
    return FIELD_SEPARATOR.join([name, kind.value, f"\t\t{value}", note])


def dump_parameters(table: ParameterTable) -> str:
    return "".join(
        format_parameter_line(name, kind, value) + LINE_ENDING
        for name, kind, value in table.items()
    )


def _is_passthrough(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


def _compact(text: str) -> str:
    return text.replace("\t", "").replace(" ", "").strip("\r\n")


def _parse_line(path: Path, line_no: int, raw: str) -> Tuple[str, ParameterType, ParameterValue]:
    fields = [item for item in _compact(raw).split(FIELD_SEPARATOR) if item]
    if len(fields) < 3:
        raise ParameterFormatError(path, line_no, "expected 'name:type:value:note'")

    name, type_tag, token = fields[0], fields[1], fields[2]
    try:
        kind = ParameterType(type_tag)
    except ValueError:
        raise ParameterFormatError(
            path, line_no, f"unknown type '{type_tag}' for parameter '{name}'"
        ) from None

    try:
        if kind is ParameterType.FLOAT:
            return name, kind, float(token)
        if kind is ParameterType.INTEGER:
            return name, kind, int(token)
    except ValueError:
        raise ParameterFormatError(
            path, line_no, f"value '{token}' of '{name}' is not a valid {kind.value}"
        ) from None
    return name, kind, token


def _key_of(line: str) -> str:
    return _compact(line.split(FIELD_SEPARATOR, 1)[0])


def _replace_value(line: str, new_value: str) -> str:
    parts = line.split(FIELD_SEPARATOR, 3)
    if len(parts) < 3:
        return line
    raw_value = parts[2]
    token = raw_value.strip(" \t")
    if token:
        lead = raw_value[: raw_value.index(token)]
        trail = raw_value[raw_value.index(token) + len(token):]
    else:
        lead, trail = "\t\t", ""
    parts[2] = f"{lead}{new_value}{trail}"
    return FIELD_SEPARATOR.join(parts)
