"""Manual correction of extracted fields by selecting document tokens."""

from .tokens import tokenize
from .session import (
    CorrectionSession,
    Idle,
    Editing,
    parse_selection_key,
    apply_selection,
    get_value,
    LINKED_CORRECTIONS,
)

__all__ = [
    'CorrectionSession',
    'Idle',
    'Editing',
    'parse_selection_key',
    'apply_selection',
    'get_value',
    'tokenize',
    'LINKED_CORRECTIONS',
]
