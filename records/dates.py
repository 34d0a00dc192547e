"""
Date representations used by the record pages.

Production dates are stored and displayed as ``DD/MM/YYYY`` but edited as
ISO ``YYYY-MM-DD``; older rows and task dates use ``DD/MM/YY``.
"""

from datetime import date, datetime
from typing import Optional

DISPLAY_FORMAT = '%d/%m/%Y'
INPUT_FORMAT = '%Y-%m-%d'
SHORT_DISPLAY_FORMAT = '%d/%m/%y'

PARSE_FORMATS = (DISPLAY_FORMAT, SHORT_DISPLAY_FORMAT, INPUT_FORMAT)


def parse_date(value) -> Optional[date]:
    """Parse any known record date representation; ``None`` when unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    # Backend timestamps (2025-08-01T00:00:00.000Z)
    if 'T' in text:
        text = text.split('T', 1)[0]

    for fmt in PARSE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_input_date(value) -> Optional[date]:
    """Strict parse of the ISO form-input representation."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), INPUT_FORMAT).date()
    except ValueError:
        return None


def to_input_date(value) -> str:
    """Stored representation -> ``YYYY-MM-DD`` for editing."""
    parsed = parse_date(value)
    if parsed is None:
        return value or ''
    return parsed.strftime(INPUT_FORMAT)


def to_display_date(value) -> str:
    """``YYYY-MM-DD`` form input -> ``DD/MM/YYYY`` storage."""
    parsed = parse_date(value)
    if parsed is None:
        return value or ''
    return parsed.strftime(DISPLAY_FORMAT)
