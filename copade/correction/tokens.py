"""Token view of the document text used for manual selection."""

import re
from typing import List

_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str) -> List[str]:
    """
    Split text on whitespace runs, dropping empty tokens.

    A token's position in the returned list is the index the correction
    session selects it by, so the split must stay deterministic.
    """
    if not text:
        return []
    return [token for token in _WHITESPACE.split(text) if token]
