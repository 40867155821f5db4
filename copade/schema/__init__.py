"""Canonical field schema for COPADE invoice documents."""

from .models import (
    DiscountRecord,
    FieldRecord,
    FieldSchema,
    ORDERED_KEYS,
    DISCOUNT_KEYS,
    FIELD_LABELS,
    DISCOUNT_LABELS,
    DISCOUNT_SECTION_TITLE,
    DISCOUNT_KEY_PREFIX,
    SELECTION_KEYS,
)

__all__ = [
    'DiscountRecord',
    'FieldRecord',
    'FieldSchema',
    'ORDERED_KEYS',
    'DISCOUNT_KEYS',
    'FIELD_LABELS',
    'DISCOUNT_LABELS',
    'DISCOUNT_SECTION_TITLE',
    'DISCOUNT_KEY_PREFIX',
    'SELECTION_KEYS',
]
