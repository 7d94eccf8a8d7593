"""Record types and dataset loading using msgspec."""

from pathlib import Path
from typing import Any

import msgspec

from gridpager.exceptions import DatasetError


class Employee(msgspec.Struct, frozen=True):
    """A single employee row shown in the grid."""

    id: int
    name: str
    designation: str
    salary: int


_employee_list_json = msgspec.json.Decoder(list[Employee])
_employee_list_msgpack = msgspec.msgpack.Decoder(list[Employee])


def load_records(path: Path) -> list[Employee]:
    """Load a list of employees from a JSON or MessagePack file.

    The file format is chosen by suffix: ``.json`` or ``.msgpack``/``.mpk``.

    Args:
        path: Dataset file path

    Returns:
        Employees in file order

    Raises:
        DatasetError: If the file is missing, has an unknown suffix, or does
            not hold a list of employees
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        decoder = _employee_list_json
    elif suffix in (".msgpack", ".mpk"):
        decoder = _employee_list_msgpack
    else:
        raise DatasetError(
            f"Unsupported dataset format '{suffix or path.name}': expected .json or .msgpack"
        )

    try:
        blob = path.read_bytes()
    except OSError as e:
        raise DatasetError(f"Cannot read dataset {path}: {e}") from e

    try:
        return decoder.decode(blob)
    except msgspec.DecodeError as e:
        raise DatasetError(f"Invalid dataset {path}: {e}") from e


def record_to_dict(record: Any) -> dict[str, Any]:
    """Convert a record to a plain dict for display or JSON output.

    Args:
        record: msgspec Struct, dataclass, or mapping

    Returns:
        Dict of field name to builtin value
    """
    if isinstance(record, dict):
        return dict(record)
    builtins = msgspec.to_builtins(record)
    if not isinstance(builtins, dict):
        return {"value": builtins}
    return builtins
