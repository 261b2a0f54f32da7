"""
CSV Seed Files & Export
=======================
Checks auction seed files before they are uploaded, and writes the rows of
any derived view out as CSV.
"""

import csv
import io
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..api.errors import ArudealError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DELIMITERS = [",", "\t", ";", "|"]


class SeedFileError(ArudealError, ValueError):
    """The CSV seed file is missing or unreadable"""


def detect_delimiter(sample: str) -> str:
    """Detect CSV delimiter from sample"""
    counts = {delimiter: sample.count(delimiter) for delimiter in DELIMITERS}
    best = max(counts, key=counts.get)
    return best if counts[best] else ","


def validate_seed_file(file_path: str) -> List[str]:
    """
    Check a CSV seed file before upload.

    Args:
        file_path: Path to the seed file

    Returns:
        The header row

    Raises:
        SeedFileError: missing file, wrong extension, undecodable text, or no header row
    """
    path = Path(file_path)
    if not path.is_file():
        raise SeedFileError(f"Seed file not found: {file_path}")
    if path.suffix.lower() != ".csv":
        raise SeedFileError(f"Seed file must be a .csv file: {path.name}")

    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            reader = csv.reader(f, delimiter=detect_delimiter(sample))
            header = next(reader, None)
    except (UnicodeDecodeError, csv.Error) as e:
        raise SeedFileError(f"Seed file is not readable CSV: {path.name}") from e

    header = [h.strip() for h in header or [] if h.strip()]
    if not header:
        raise SeedFileError(f"Seed file has no header row: {path.name}")

    logger.debug("Seed file %s columns: %s", path.name, header)
    return header


def _export_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return value.get("name", "")
    if isinstance(value, (list, tuple)):
        return ",".join(str(_export_value(v)) for v in value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def export_rows(rows: Sequence[Any], fieldnames: Optional[List[str]] = None) -> str:
    """
    Export view rows to CSV

    Args:
        rows: Dataclass instances or dicts (e.g. the current page of a view)
        fieldnames: Columns to write; defaults to the first row's fields

    Returns:
        CSV content as string
    """
    if not rows:
        return ""

    dicts: List[Dict[str, Any]] = []
    for row in rows:
        if hasattr(row, "to_dict"):
            dicts.append(row.to_dict())
        elif is_dataclass(row):
            dicts.append(asdict(row))
        else:
            dicts.append(dict(row))

    fieldnames = fieldnames or list(dicts[0].keys())

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    for row in dicts:
        writer.writerow({k: _export_value(row.get(k)) for k in fieldnames})

    return output.getvalue()
