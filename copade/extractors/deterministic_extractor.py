"""Deterministic field extraction from PDF text using ordered pattern rules."""

import re
from typing import Callable, Dict, List, Optional, Tuple

from copade.schema import FieldRecord, ORDERED_KEYS, DISCOUNT_KEYS
from copade.utils import get_logger, log_field_extraction


# Two fraction digits, thousands commas kept as found
MONEY = r"\d[\d,]*\.\d{2}(?!\d)"

# Same-line amount after a linked identifier. Must start at a number
# boundary so 1234.56 is not read as 234.56.
LINE_AMOUNT = r"(?<![\d,])(\d{1,3}(?:,\d{3})+\.\d{2}|\d+\.\d{2})(?!\d)"

# Label/value separator: a colon with optional spaces, or at least one space
SEPARATOR = r"(?:\s*:\s*|\s+)"

SECTION_END = r"(?=Pedido\s+Sap|TOTAL|Neto\s+a\s+pagar|\Z)"

# Upper-case TOTAL is the summary label; "Total" inside the discount section is a line item
DISCOUNT_SECTION_END = r"(?=Neto\s+a\s+pagar|(?-i:TOTAL)|\Z)"


def _first_group(match: re.Match) -> str:
    return match.group(1)


def _normalize_date(match: re.Match) -> str:
    """DD.MM.YYYY and DD/MM/YYYY both become DD/MM/YYYY."""
    return f"{match.group(1)}/{match.group(2)}/{match.group(3)}"


def _clean_description(match: re.Match) -> str:
    """Remove the acceptance boilerplate and collapse the block to one line."""
    value = match.group(1)
    value = re.sub(r"Aceptaci[oó]n\s+del\s+Bien\s+o\s+Servicio", "", value, flags=re.IGNORECASE)
    value = re.sub(r"^:\s*", "", value)
    value = re.sub(r"\s+", " ", value)
    return value.strip()


class ExtractionRule:
    """A label/value pattern for one field plus the normalizer of its match."""

    def __init__(
        self,
        field_name: str,
        pattern: str,
        normalizer: Callable[[re.Match], str] = _first_group
    ):
        self.field_name = field_name
        self.pattern = pattern
        self.regex = re.compile(pattern, re.IGNORECASE)
        self.normalizer = normalizer

    def apply(self, text: str) -> Optional[str]:
        """Return the normalized value of the first match, or None."""
        match = self.regex.search(text)
        if not match:
            return None
        value = self.normalizer(match)
        return value.strip() or None

    def __repr__(self):
        return f"ExtractionRule(field='{self.field_name}', pattern='{self.pattern}')"


class LinkedRule:
    """
    Identifier field whose amount is read from the same line.

    The identifier is located first; the amount is only searched after
    that exact identifier value, without crossing a line break.
    """

    def __init__(self, id_field: str, amount_field: str, label: str):
        self.id_field = id_field
        self.amount_field = amount_field
        self.label = label
        # digits only, so "1,000.00" is not read as identifier "1"
        self.id_rule = ExtractionRule(id_field, label + SEPARATOR + r"(\d+)(?!\d|[.,]\d)")

    def apply(self, text: str) -> Tuple[Optional[str], Optional[str]]:
        identifier = self.id_rule.apply(text)
        if not identifier:
            return None, None

        amount_regex = re.compile(
            self.label + SEPARATOR + re.escape(identifier) + r"(?!\d)[^\r\n]*?" + LINE_AMOUNT,
            re.IGNORECASE
        )
        match = amount_regex.search(text)
        return identifier, match.group(1) if match else None

    def __repr__(self):
        return f"LinkedRule({self.id_field} -> {self.amount_field})"


class DeterministicExtractor:
    """Deterministic extractor over the linear text of a COPADE invoice."""

    # Independent single-value rules, run over the full text
    FIELD_RULES: List[ExtractionRule] = [
        ExtractionRule(
            'numeroAcreedorSAP',
            r"N[uú]mero\s+de\s+Acreedor\s+SAP:?\s*(\d+)",
        ),
        ExtractionRule(
            'noCopade',
            r"No\.\s*COPADE:?\s*([A-Za-z0-9_-]+)",
        ),
        ExtractionRule(
            'noContrato',
            r"No\.\s*Contrato:?\s*([A-Za-z0-9_-]+)",
        ),
        ExtractionRule(
            'noEstRem',
            r"\b(?:No\.\s*Est\s*/\s*Rem|Estimaci[oó]n|Remisi[oó]n|Rem\b)\.?:?\s*([A-Za-z0-9][A-Za-z0-9_.-]*)",
        ),
        ExtractionRule(
            'fechaCont',
            r"(?:Fecha\s*cont\.|Emisi[oó]n):?\s*(\d{2})[./](\d{2})[./](\d{4})",
            _normalize_date,
        ),
        # Financial summary, not anchored to line start
        ExtractionRule(
            'importe',
            r"\bImporte" + SEPARATOR + r"\$?\s*(" + MONEY + r")",
        ),
        ExtractionRule(
            'iva',
            r"\bIVA" + SEPARATOR + r"\$?\s*(" + MONEY + r")",
        ),
        ExtractionRule(
            'total',
            r"\bTOTAL" + SEPARATOR + r"\$?\s*(" + MONEY + r")",
        ),
        ExtractionRule(
            'netoAPagar',
            r"(?:Neto\s+a\s+)?Pagar" + SEPARATOR + r"\$?\s*(" + MONEY + r")",
        ),
        ExtractionRule(
            'descripcionBienServicio',
            r"Descripci[oó]n\s+de\s+Bien\s+y\s+Servicio\s*([\s\S]*?)" + SECTION_END,
            _clean_description,
        ),
    ]

    LINKED_RULES: List[LinkedRule] = [
        LinkedRule('pedidoSap', 'importePedidoSap', r"Pedido\s+Sap"),
        LinkedRule('recepcionBien', 'importeRecepcionBien', r"Recepci[oó]n\s+del\s+bien\s*\(s\)"),
    ]

    DISCOUNT_SECTION = re.compile(
        r"DESCUENTO\s+S/COMPRAS\s*\(NC\)([\s\S]*?)" + DISCOUNT_SECTION_END,
        re.IGNORECASE
    )

    # Scoped to the discount section; amounts may be negative
    DISCOUNT_RULES: List[ExtractionRule] = [
        ExtractionRule('cantidad', r"Cantidad" + SEPARATOR + r"\$?\s*(-?" + MONEY + r")"),
        ExtractionRule('iva', r"\bIVA" + SEPARATOR + r"\$?\s*(-?" + MONEY + r")"),
        ExtractionRule('total', r"\bTotal" + SEPARATOR + r"\$?\s*(-?" + MONEY + r")"),
    ]

    def __init__(self, text: str):
        """
        Initialize extractor with document text.

        Args:
            text: Concatenated page text, line breaks preserved
        """
        self.full_text = text or ""

    def extract_all_fields(self) -> FieldRecord:
        """
        Extract all fields and return them as a FieldRecord.

        Fields without a match are left as None; this never raises for
        missing labels.

        Returns:
            FieldRecord with extracted values
        """
        logger = get_logger()
        logger.info("=" * 60)
        logger.info("DETERMINISTIC EXTRACTION")
        logger.info("=" * 60)

        extracted: Dict[str, Optional[str]] = {}

        for rule in self.FIELD_RULES:
            extracted[rule.field_name] = self._apply_rule(rule, self.full_text)

        for linked in self.LINKED_RULES:
            identifier, amount = linked.apply(self.full_text)
            logger.debug(f"  {linked!r}: id={identifier!r} amount={amount!r}")
            extracted[linked.id_field] = identifier
            extracted[linked.amount_field] = amount

        for field_name in ORDERED_KEYS:
            log_field_extraction(logger, field_name, extracted.get(field_name), source="deterministic")

        discount = self._extract_discount()
        if discount:
            extracted['descuento'] = discount
            for key in DISCOUNT_KEYS:
                log_field_extraction(logger, f"descuento.{key}", discount.get(key), source="deterministic")
        else:
            logger.debug("  No discount section values found")

        logger.info("=" * 60)

        return FieldRecord(**extracted)

    def _apply_rule(self, rule: ExtractionRule, text: str) -> Optional[str]:
        value = rule.apply(text)
        get_logger().debug(f"  {rule!r} -> {value!r}")
        return value

    def _find_discount_section(self) -> Optional[str]:
        """Text between the discount header and the next summary label."""
        match = self.DISCOUNT_SECTION.search(self.full_text)
        return match.group(1) if match else None

    def _extract_discount(self) -> Optional[Dict[str, Optional[str]]]:
        """
        Extract the discount sub-fields from the discount section only.

        Returns:
            Dict of discount values, or None when the section is missing
            or none of its values matched
        """
        section = self._find_discount_section()
        if section is None:
            return None

        values = {rule.field_name: self._apply_rule(rule, section) for rule in self.DISCOUNT_RULES}
        if not any(values.values()):
            return None
        return values


def extract(text: str) -> FieldRecord:
    """Extract a FieldRecord from raw document text."""
    return DeterministicExtractor(text).extract_all_fields()
