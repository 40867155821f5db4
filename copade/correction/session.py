"""Edit session reconciling automatic extraction with manual token selection."""

from typing import List, Optional, Tuple, Union
from pydantic import BaseModel

from copade.schema import FieldRecord, SELECTION_KEYS
from copade.utils import get_logger, log_correction
from .tokens import tokenize


# Editing the key on the left also overwrites the key on the right
LINKED_CORRECTIONS = {
    'importePedidoSap': 'importeRecepcionBien',
}


class Idle(BaseModel):
    """No field is targeted for correction."""

    model_config = {"frozen": True}


class Editing(BaseModel):
    """A field is targeted; ``tokens`` holds the pending indices in ascending order."""

    key: str
    tokens: Tuple[int, ...] = ()

    model_config = {"frozen": True}


SessionState = Union[Idle, Editing]


def parse_selection_key(key: str) -> Tuple[str, Optional[str]]:
    """
    Split a selection key into its top-level key and discount sub-key.

    Args:
        key: A top-level key (``importe``) or ``descuento.<subkey>``

    Returns:
        Tuple of (parent_key, child_key); child_key is None for top-level keys

    Raises:
        ValueError: If the key is not part of the schema
    """
    if key not in SELECTION_KEYS:
        raise ValueError(f"Unknown field key: {key!r}")
    parent, _, child = key.partition(".")
    return parent, child or None


def get_value(record: FieldRecord, key: str) -> Optional[str]:
    """Current value of a top-level or discount key."""
    parent, child = parse_selection_key(key)
    if child:
        return getattr(record.descuento, child) if record.descuento else None
    return getattr(record, parent)


def apply_selection(record: FieldRecord, key: str, value: str) -> FieldRecord:
    """
    Commit a value to a key, returning a new record.

    Discount keys create the discount record when it is absent. Linked
    keys also overwrite their paired field.
    """
    parent, child = parse_selection_key(key)
    if child:
        discount = record.descuento.to_dict() if record.descuento else {}
        discount[child] = value
        return record.with_values(descuento=discount)

    updates = {parent: value}
    if parent in LINKED_CORRECTIONS:
        updates[LINKED_CORRECTIONS[parent]] = value
    return record.with_values(**updates)


class CorrectionSession:
    """
    State machine driving manual correction of one document.

    Holds the working record, the token view of the source text and the
    current edit state (Idle or Editing).
    """

    def __init__(self, record: FieldRecord, text: str):
        """
        Initialize a correction session.

        Args:
            record: FieldRecord produced by extraction
            text: Source text the record was extracted from
        """
        self.initial_record = record
        self.record = record
        self.tokens: List[str] = tokenize(text)
        self.state: SessionState = Idle()
        self.corrections_applied: List[str] = []

    @property
    def active_key(self) -> Optional[str]:
        """Key currently targeted, or None when idle."""
        return self.state.key if isinstance(self.state, Editing) else None

    @property
    def selected_indices(self) -> Tuple[int, ...]:
        return self.state.tokens if isinstance(self.state, Editing) else ()

    @property
    def pending_value(self) -> Optional[str]:
        """Selected tokens joined in document order, or None if nothing is selected."""
        if not self.selected_indices:
            return None
        return " ".join(self.tokens[index] for index in self.selected_indices)

    def display_value(self, key: str) -> Optional[str]:
        """Pending selection for the active key, committed value otherwise."""
        if key == self.active_key and self.selected_indices:
            return self.pending_value
        return get_value(self.record, key)

    def select_field(self, key: str):
        """
        Target a field for correction.

        Selecting the active key again clears the target and discards its
        pending tokens. Selecting another key first commits the pending
        tokens of the previous one.

        Raises:
            ValueError: If the key is not part of the schema
        """
        parse_selection_key(key)

        if isinstance(self.state, Editing):
            if self.state.key == key:
                self.state = Idle()
                return
            if self.state.tokens:
                self._commit(self.state.key, self.pending_value)

        self.state = Editing(key=key)

    def toggle_token(self, index: int):
        """
        Add or remove a token from the pending selection.

        Ignored while no field is targeted.

        Raises:
            IndexError: If the index is outside the token view
        """
        if not isinstance(self.state, Editing):
            return
        if not 0 <= index < len(self.tokens):
            raise IndexError(f"Token index {index} out of range (0-{len(self.tokens) - 1})")

        selected = set(self.state.tokens)
        if index in selected:
            selected.remove(index)
        else:
            selected.add(index)
        self.state = Editing(key=self.state.key, tokens=tuple(sorted(selected)))

    def finalize(self) -> FieldRecord:
        """
        Commit any pending selection and return the resulting record.

        The session is left idle, so calling this again returns the same
        record.
        """
        if isinstance(self.state, Editing) and self.state.tokens:
            self._commit(self.state.key, self.pending_value)
        self.state = Idle()
        return self.record

    def _commit(self, key: str, value: str):
        old_value = get_value(self.record, key)
        self.record = apply_selection(self.record, key, value)
        self.corrections_applied.append(f"{key}: {old_value} → {value}")
        log_correction(get_logger(), key, old_value, value)

        linked = LINKED_CORRECTIONS.get(key)
        if linked:
            self.corrections_applied.append(f"{linked}: synced with {key}")
