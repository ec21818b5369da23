from __future__ import annotations

from typing import Dict, Optional

from ..normalize import extract_subfields, flatten
from ..segment import TransactionChunk
from .base import BankDialect


# orden fijo: el primer prefijo que coincide se queda con el segmento
BNP_FIELDS = {
    "type": "TYPE/",           # código y etiqueta del asiento
    "code": "CODE/",           # código local del país
    "remittance": "REMI/",     # concepto de la orden
    "vacc": "VACC/",           # cuenta virtual
    "reference": "EREF/",      # referencia del pago original
    "ordering_party": "ORDP/NAME/",
    "info": "INFO/",           # cuenta del ordenante
    "ordering_bank": "OBK/",
}


class Bnp(BankDialect):
    """BNP Paribas España: subcampos 'CLAVE/valor' separados por '//'."""

    def accept(self, text: str) -> bool:
        if not text:
            return False
        return "F01BNPAESMSAXXX" in text

    def _fields(self, chunk: TransactionChunk) -> Dict[str, str]:
        return extract_subfields(chunk.description, BNP_FIELDS)

    def description(self, chunk: TransactionChunk) -> Optional[str]:
        if chunk.description is None:
            return None
        text = flatten(chunk.description)
        return text[:-1] if text.endswith("/") else text

    def contra_account_number(self, chunk: TransactionChunk) -> Optional[str]:
        return self._fields(chunk).get("info") or None

    def contra_account_name(self, chunk: TransactionChunk) -> Optional[str]:
        return self._fields(chunk).get("ordering_party") or None

    def subfields(self, chunk: TransactionChunk) -> Dict[str, str]:
        data = self._fields(chunk)
        return {
            "code": data.get("code", ""),
            "ref": data.get("reference", ""),
            "bank_ref": data.get("ordering_bank", ""),
            "eref": data.get("reference", ""),
            "bic": data.get("ordering_bank", ""),
            "iban": data.get("vacc", ""),
            "tx_text": data.get("type", ""),
            "purpose": data.get("remittance", ""),
            "account_holder": data.get("ordering_party", ""),
        }
