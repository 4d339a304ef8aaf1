"""
CSV ingestion for lead uploads
"""

import csv
import io
from typing import Dict, List, Optional

from ..config.settings import REQUIRED_LEAD_FIELDS
from ..errors import CSVValidationError


def parse_leads_csv(content: bytes, encoding: str = "utf-8-sig") -> List[Dict[str, str]]:
    """Parse raw CSV bytes into row dicts with lower-cased, trimmed headers"""
    try:
        text = content.decode(encoding)
    except UnicodeDecodeError as e:
        raise CSVValidationError(f"Failed to parse CSV file: {e}") from e

    try:
        reader = csv.DictReader(io.StringIO(text, newline=""))
        rows = []
        for row in reader:
            rows.append({
                (key or "").strip().lower(): (value or "").strip() if isinstance(value, str) else ""
                for key, value in row.items()
                if key
            })
    except csv.Error as e:
        raise CSVValidationError(f"Failed to parse CSV data: {e}") from e
    return rows


def missing_headers(rows: List[Dict[str, str]], expected: Optional[List[str]] = None) -> List[str]:
    """Expected headers absent from the first row; all of them when there are no rows"""
    expected = expected if expected is not None else REQUIRED_LEAD_FIELDS
    if not rows:
        return list(expected)
    actual = {key.lower() for key in rows[0]}
    return [header for header in expected if header.lower() not in actual]


def load_leads_csv(content: bytes, expected: Optional[List[str]] = None) -> List[Dict[str, str]]:
    """Parse and validate an uploaded leads CSV"""
    expected = expected if expected is not None else REQUIRED_LEAD_FIELDS
    rows = parse_leads_csv(content)
    missing = missing_headers(rows, expected)
    if missing:
        raise CSVValidationError(
            f"Invalid CSV headers. Missing headers: {', '.join(missing)}. "
            f"Expected: {','.join(expected)}"
        )
    return rows
