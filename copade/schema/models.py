"""Canonical schema for COPADE invoice extracted fields."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


# Top-level keys in display/export order
ORDERED_KEYS = [
    'numeroAcreedorSAP',
    'noCopade',
    'noContrato',
    'importe',
    'iva',
    'total',
    'noEstRem',
    'descripcionBienServicio',
    'pedidoSap',
    'recepcionBien',
    'importePedidoSap',
    'importeRecepcionBien',
    'fechaCont',
    'netoAPagar',
]

DISCOUNT_KEYS = [
    'cantidad',
    'iva',
    'total',
]

FIELD_LABELS = {
    'numeroAcreedorSAP': "Número de Acreedor SAP:",
    'noCopade': "No. COPADE:",
    'noContrato': "No. Contrato:",
    'importe': "Importe:",
    'iva': "IVA:",
    'total': "TOTAL:",
    'noEstRem': "No. Est / Rem:",
    'descripcionBienServicio': "Descripción de Bien y Servicio:",
    'pedidoSap': "Pedido Sap:",
    'importePedidoSap': "Importe Pedido Sap:",
    'recepcionBien': "Recepción del bien (s):",
    'importeRecepcionBien': "Importe Recepción bien:",
    'fechaCont': "Fecha cont.:",
    'netoAPagar': "Neto a pagar:",
}

DISCOUNT_LABELS = {
    'cantidad': "Cantidad:",
    'iva': "IVA:",
    'total': "Total:",
}

DISCOUNT_SECTION_TITLE = "DESCUENTO S/COMPRAS (NC)"

DISCOUNT_KEY_PREFIX = "descuento"

# Keys accepted by the correction session, top-level first
SELECTION_KEYS = ORDERED_KEYS + [f"{DISCOUNT_KEY_PREFIX}.{key}" for key in DISCOUNT_KEYS]


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    if isinstance(v, str) and not v.strip():
        return None
    return v


class DiscountRecord(BaseModel):
    """
    Discount on purchases (nota de crédito) line items.

    Amounts may be negative and are kept exactly as they appear in the
    document, thousands separators included.
    """

    cantidad: Optional[str] = Field(
        default=None,
        description="Discount amount before tax"
    )

    iva: Optional[str] = Field(
        default=None,
        description="Tax on the discount"
    )

    total: Optional[str] = Field(
        default=None,
        description="Discount total"
    )

    @field_validator('cantidad', 'iva', 'total', mode='before')
    @classmethod
    def normalize_blank(cls, v):
        """Treat empty strings as missing values."""
        return _blank_to_none(v)

    def has_values(self) -> bool:
        """True when at least one discount value is present."""
        return any(getattr(self, key) for key in DISCOUNT_KEYS)

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in DISCOUNT_KEYS}

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }


class FieldRecord(BaseModel):
    """
    Canonical record of the fields extracted from a COPADE invoice.

    All fields support None when the value was not found. The record is
    immutable: corrections build a new record with ``with_values``.
    """

    # General information
    numeroAcreedorSAP: Optional[str] = Field(
        default=None,
        description="SAP creditor number"
    )

    noCopade: Optional[str] = Field(
        default=None,
        description="COPADE number"
    )

    noContrato: Optional[str] = Field(
        default=None,
        description="Contract number"
    )

    # Financial summary
    importe: Optional[str] = Field(
        default=None,
        description="Amount before tax"
    )

    iva: Optional[str] = Field(
        default=None,
        description="Tax (IVA)"
    )

    total: Optional[str] = Field(
        default=None,
        description="Total amount"
    )

    noEstRem: Optional[str] = Field(
        default=None,
        description="Estimate / delivery note number"
    )

    descripcionBienServicio: Optional[str] = Field(
        default=None,
        description="Description of the goods or service"
    )

    # Line items
    pedidoSap: Optional[str] = Field(
        default=None,
        description="SAP purchase order number"
    )

    recepcionBien: Optional[str] = Field(
        default=None,
        description="Goods receipt number"
    )

    importePedidoSap: Optional[str] = Field(
        default=None,
        description="Amount on the SAP purchase order line"
    )

    importeRecepcionBien: Optional[str] = Field(
        default=None,
        description="Amount on the goods receipt line"
    )

    fechaCont: Optional[str] = Field(
        default=None,
        description="Accounting date in DD/MM/YYYY format"
    )

    netoAPagar: Optional[str] = Field(
        default=None,
        description="Net amount to pay"
    )

    descuento: Optional[DiscountRecord] = Field(
        default=None,
        description="Discount on purchases section, only when it has values"
    )

    @field_validator(*ORDERED_KEYS, mode='before')
    @classmethod
    def normalize_blank(cls, v):
        """Treat empty strings as missing values."""
        return _blank_to_none(v)

    @field_validator('descuento', mode='after')
    @classmethod
    def drop_empty_discount(cls, v: Optional[DiscountRecord]) -> Optional[DiscountRecord]:
        """A discount record without any value is the same as no discount."""
        if v is not None and not v.has_values():
            return None
        return v

    def with_values(self, **updates) -> "FieldRecord":
        """
        Return a validated copy with some fields replaced.

        Args:
            **updates: Top-level field values. ``descuento`` may be a
                DiscountRecord, a dict or None.

        Returns:
            New FieldRecord; this record is left untouched
        """
        data = self.model_dump()
        for key, value in updates.items():
            if isinstance(value, DiscountRecord):
                value = value.model_dump()
            data[key] = value
        return FieldRecord(**data)

    def found_fields(self) -> list[str]:
        """Top-level keys that have a value, in schema order."""
        return [key for key in ORDERED_KEYS if getattr(self, key)]

    def to_dict(self) -> dict:
        """Convert to a dictionary in schema order."""
        result = {key: getattr(self, key) for key in ORDERED_KEYS}
        if self.descuento is not None:
            result['descuento'] = self.descuento.to_dict()
        return result

    def to_json_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary without missing values."""
        result = {key: value for key, value in self.to_dict().items() if value is not None}
        if self.descuento is not None:
            result['descuento'] = {
                key: value for key, value in self.descuento.to_dict().items() if value is not None
            }
        return result

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }


class FieldSchema:
    """Lookup helpers over the static field definitions."""

    @classmethod
    def get_label(cls, key: str) -> str:
        """
        Get the display label for a top-level or ``descuento.<subkey>`` key.

        Raises:
            KeyError: If the key is not part of the schema
        """
        if key.startswith(DISCOUNT_KEY_PREFIX + "."):
            return DISCOUNT_LABELS[key.split(".", 1)[1]]
        return FIELD_LABELS[key]
