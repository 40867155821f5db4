"""Tests for the field schema and record models."""

import json
import pytest
from pydantic import ValidationError
from copade.schema import (
    DiscountRecord,
    FieldRecord,
    FieldSchema,
    ORDERED_KEYS,
    DISCOUNT_KEYS,
    FIELD_LABELS,
    DISCOUNT_LABELS,
    SELECTION_KEYS,
)


class TestSchemaDefinition:
    """Test that the static schema is complete and consistent."""

    def test_ordered_keys(self):
        """Test the fourteen top-level keys in display order."""
        assert ORDERED_KEYS == [
            'numeroAcreedorSAP', 'noCopade', 'noContrato', 'importe', 'iva', 'total',
            'noEstRem', 'descripcionBienServicio', 'pedidoSap', 'recepcionBien',
            'importePedidoSap', 'importeRecepcionBien', 'fechaCont', 'netoAPagar',
        ]

    def test_model_fields_match_keys(self):
        """Test that the record has exactly the schema keys plus descuento."""
        assert set(FieldRecord.model_fields.keys()) == set(ORDERED_KEYS) | {'descuento'}
        assert list(DiscountRecord.model_fields.keys()) == DISCOUNT_KEYS

    def test_every_key_has_label(self):
        """Test that every key, top-level and discount, has a label."""
        assert set(FIELD_LABELS) == set(ORDERED_KEYS)
        assert set(DISCOUNT_LABELS) == set(DISCOUNT_KEYS)

    def test_selection_keys(self):
        """Test that discount keys are addressed with the descuento prefix."""
        assert SELECTION_KEYS[:14] == ORDERED_KEYS
        assert SELECTION_KEYS[14:] == ['descuento.cantidad', 'descuento.iva', 'descuento.total']

    def test_get_label(self):
        """Test label lookup for both key shapes."""
        assert FieldSchema.get_label('noCopade') == "No. COPADE:"
        assert FieldSchema.get_label('descuento.total') == "Total:"
        with pytest.raises(KeyError):
            FieldSchema.get_label('unknown')


class TestFieldRecord:
    """Test record validation and copying."""

    def test_empty_record(self):
        """Test that a default record has every field absent."""
        record = FieldRecord()
        for key in ORDERED_KEYS:
            assert getattr(record, key) is None, f"{key} should be None"
        assert record.descuento is None

    def test_blank_strings_become_none(self):
        """Test that blank values are stored as missing."""
        record = FieldRecord(importe="", iva="   ", total="10.00")
        assert record.importe is None
        assert record.iva is None
        assert record.total == "10.00"

    def test_extra_keys_rejected(self):
        """Test that ad-hoc keys are not accepted."""
        with pytest.raises(ValidationError):
            FieldRecord(subtotal="10.00")

    def test_all_empty_discount_dropped(self):
        """Test that a discount record without values is dropped."""
        record = FieldRecord(descuento={'cantidad': '', 'iva': None, 'total': ''})
        assert record.descuento is None, "All-empty discount should be dropped"

    def test_partial_discount_kept(self):
        """Test that one discount value is enough to keep the record."""
        record = FieldRecord(descuento={'cantidad': '-50.00'})
        assert record.descuento is not None
        assert record.descuento.cantidad == '-50.00'
        assert record.descuento.iva is None

    def test_record_is_frozen(self):
        """Test that records cannot be mutated in place."""
        record = FieldRecord(importe="1.00")
        with pytest.raises(ValidationError):
            record.importe = "2.00"

    def test_with_values_copies(self):
        """Test that with_values leaves the original untouched."""
        record = FieldRecord(importe="1.00", descuento={'iva': '-1.00'})
        updated = record.with_values(importe="2.00", descuento=DiscountRecord(total='-3.00'))

        assert record.importe == "1.00"
        assert record.descuento.iva == '-1.00'
        assert updated.importe == "2.00"
        assert updated.descuento.total == '-3.00'
        assert updated.descuento.iva is None

    def test_to_dict_order(self):
        """Test that to_dict follows schema order and omits a missing discount."""
        record = FieldRecord(netoAPagar="5.00", noCopade="X-1")
        data = record.to_dict()
        assert list(data.keys()) == ORDERED_KEYS
        assert 'descuento' not in data

    def test_json_serialization(self):
        """Test that the JSON dict only carries present values."""
        record = FieldRecord(importe="1,000.00", descuento={'cantidad': '-5.00'})
        data = json.loads(json.dumps(record.to_json_dict()))
        assert data == {'importe': '1,000.00', 'descuento': {'cantidad': '-5.00'}}
        assert FieldRecord(**data) == record
