"""Export formatting for confirmed extraction results."""

from typing import Dict, List, Optional

from copade.schema import (
    FieldRecord,
    ORDERED_KEYS,
    DISCOUNT_KEYS,
    FIELD_LABELS,
    DISCOUNT_LABELS,
    DISCOUNT_SECTION_TITLE,
)

NOT_FOUND = "Not found"


def format_value(value: Optional[str], remove_commas: bool = True) -> Optional[str]:
    """Optionally strip thousands separators from a value."""
    if not value:
        return value
    return value.replace(",", "") if remove_commas else value


def to_labeled_text(record: FieldRecord, remove_commas: bool = True) -> str:
    """
    Render every field as ``<label> <value>``, one per line.

    Missing values render as ``Not found``. The discount block is appended
    after a blank line only when the record has one.
    """
    lines = [
        f"{FIELD_LABELS[key]} {format_value(getattr(record, key), remove_commas) or NOT_FOUND}"
        for key in ORDERED_KEYS
    ]

    if record.descuento is not None:
        lines.append("")
        lines.append(f"{DISCOUNT_SECTION_TITLE}:")
        for key in DISCOUNT_KEYS:
            value = format_value(getattr(record.descuento, key), remove_commas)
            lines.append(f"  {DISCOUNT_LABELS[key]} {value or NOT_FOUND}")

    return "\n".join(lines)


def _is_exportable(value: Optional[str]) -> bool:
    return bool(value) and bool(value.strip()) and value.strip() != NOT_FOUND


def to_values_text(record: FieldRecord, remove_commas: bool = True) -> str:
    """Render only the non-empty values, one per line, discount values last."""
    values: List[str] = [
        format_value(getattr(record, key), remove_commas) for key in ORDERED_KEYS
    ]
    if record.descuento is not None:
        values.extend(
            format_value(getattr(record.descuento, key), remove_commas) for key in DISCOUNT_KEYS
        )
    return "\n".join(value for value in values if _is_exportable(value))


def to_json_dict(record: FieldRecord, remove_commas: bool = False) -> Dict:
    """JSON-serializable dict of the present values, in schema order."""
    data = record.to_json_dict()
    if not remove_commas:
        return data

    result = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = {k: format_value(v, True) for k, v in value.items()}
        else:
            result[key] = format_value(value, True)
    return result
