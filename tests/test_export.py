"""Tests for export formatting."""

from copade.export import format_value, to_labeled_text, to_values_text, to_json_dict
from copade.schema import FieldRecord


class TestFormatValue:

    def test_remove_commas(self):
        assert format_value("1,234,567.89") == "1234567.89"

    def test_keep_commas(self):
        assert format_value("1,234.56", remove_commas=False) == "1,234.56"

    def test_missing(self):
        assert format_value(None) is None
        assert format_value("") == ""


class TestLabeledText:
    """Test the 'Copy All' rendering."""

    def test_missing_fields_placeholder(self):
        """Test that every field renders, missing ones as Not found."""
        lines = to_labeled_text(FieldRecord(importe="1,000.00")).split("\n")
        assert len(lines) == 14, "One line per top-level field"
        assert lines[0] == "Número de Acreedor SAP: Not found"
        assert lines[3] == "Importe: 1000.00"
        assert lines[13] == "Neto a pagar: Not found"

    def test_keep_commas(self):
        text = to_labeled_text(FieldRecord(importe="1,000.00"), remove_commas=False)
        assert "Importe: 1,000.00" in text

    def test_discount_block(self):
        """Test the discount header and indented lines."""
        text = to_labeled_text(FieldRecord(descuento={'cantidad': '-1,050.00'}))
        assert text.endswith(
            "\n\nDESCUENTO S/COMPRAS (NC):\n"
            "  Cantidad: -1050.00\n"
            "  IVA: Not found\n"
            "  Total: Not found"
        )

    def test_no_discount_block(self):
        assert "DESCUENTO" not in to_labeled_text(FieldRecord())


class TestValuesText:
    """Test the 'Copy Values' rendering."""

    def test_values_in_order(self, sample_record):
        """Test that values follow schema order with discount values last."""
        lines = to_values_text(sample_record).split("\n")
        assert lines[0] == "100234567"
        assert lines[3] == "1234.56"
        assert lines[-4] == "1374.09"
        assert lines[-3:] == ["-50.00", "-8.00", "-58.00"]

    def test_skips_missing_and_placeholder(self):
        """Test that empty values and the placeholder are omitted."""
        record = FieldRecord(noCopade="Not found", iva="16.00", total=" ")
        assert to_values_text(record) == "16.00"

    def test_empty_record(self):
        assert to_values_text(FieldRecord()) == ""


class TestJsonDict:

    def test_commas_kept_by_default(self):
        record = FieldRecord(total="2,000.00", descuento={'total': '-1,000.00'})
        assert to_json_dict(record) == {'total': '2,000.00', 'descuento': {'total': '-1,000.00'}}

    def test_commas_removed(self):
        record = FieldRecord(total="2,000.00", descuento={'total': '-1,000.00'})
        assert to_json_dict(record, remove_commas=True) == {'total': '2000.00', 'descuento': {'total': '-1000.00'}}
