"""Pytest configuration and fixtures."""

import pytest
from copade.extractors import extract
from copade.correction import CorrectionSession

SAMPLE_TEXT = """PEMEX EXPLORACIÓN Y PRODUCCIÓN
Número de Acreedor SAP: 100234567
No. COPADE: ABC-2024-0012
No. Contrato: 640-CT-123
Fecha cont.: 15.03.2024
No. Est / Rem: EST-07
Descripción de Bien y Servicio:
Servicio de mantenimiento
preventivo a equipo   de bombeo
Aceptación del Bien o Servicio
Pedido Sap 4500123456 Partida 10 1,234.56
Recepción del bien (s) 5000987654 Entrada 1,234.56
Importe: $1,234.56
IVA: $197.53
TOTAL: $1,432.09
DESCUENTO S/COMPRAS (NC)
Cantidad -50.00
IVA -8.00
Total -58.00
Neto a pagar: $1,374.09

"""

# Tokens: 0 Pedido, 1 Sap, 2 4500, 3 Importe, 4 999.00, 5 1,000.00, 6 Fin
SHORT_TEXT = "Pedido Sap 4500\nImporte 999.00\n1,000.00 Fin"


@pytest.fixture
def sample_text():
    """Two-page style invoice text with every section present."""
    return SAMPLE_TEXT


@pytest.fixture
def expected_sample():
    """Expected extraction results for SAMPLE_TEXT."""
    return {
        "numeroAcreedorSAP": "100234567",
        "noCopade": "ABC-2024-0012",
        "noContrato": "640-CT-123",
        "importe": "1,234.56",
        "iva": "197.53",
        "total": "1,432.09",
        "noEstRem": "EST-07",
        "descripcionBienServicio": "Servicio de mantenimiento preventivo a equipo de bombeo",
        "pedidoSap": "4500123456",
        "recepcionBien": "5000987654",
        "importePedidoSap": "1,234.56",
        "importeRecepcionBien": "1,234.56",
        "fechaCont": "15/03/2024",
        "netoAPagar": "1,374.09",
        "descuento": {
            "cantidad": "-50.00",
            "iva": "-8.00",
            "total": "-58.00",
        },
    }


@pytest.fixture
def sample_record(sample_text):
    """FieldRecord extracted from SAMPLE_TEXT."""
    return extract(sample_text)


@pytest.fixture
def short_session():
    """Correction session over SHORT_TEXT with the record extracted from it."""
    return CorrectionSession(extract(SHORT_TEXT), SHORT_TEXT)
