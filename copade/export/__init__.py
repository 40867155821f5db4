"""Text and JSON renderings of a confirmed FieldRecord."""

from .formatter import (
    NOT_FOUND,
    format_value,
    to_labeled_text,
    to_values_text,
    to_json_dict,
)

__all__ = ['NOT_FOUND', 'format_value', 'to_labeled_text', 'to_values_text', 'to_json_dict']
