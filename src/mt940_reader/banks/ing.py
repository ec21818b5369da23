from __future__ import annotations

from typing import Dict, List, Optional

from ..normalize import flatten, split_keywords
from ..segment import TransactionChunk, header
from .base import BankDialect


KEYWORDS = ("EREF", "CNTP", "REMI", "MARF", "CSID", "PREF", "RTRN", "PURP", "ULTC", "ULTD")


def _counterparty(value: str) -> List[str]:
    # IBAN/BIC/NOMBRE/CIUDAD, cualquiera puede venir vacío
    parts = value.split("/")
    return parts + [""] * (4 - len(parts))


def _remittance(value: str) -> str:
    # USTD//texto libre o STRD/CUR/referencia
    if value.startswith("USTD//"):
        return value[len("USTD//"):]
    if value.startswith("STRD/CUR/"):
        return value[len("STRD/CUR/"):]
    return value


class Ing(BankDialect):
    def accept(self, text: str) -> bool:
        if not text:
            return False
        return "INGBNL2A" in header(text)

    def _keywords(self, chunk: TransactionChunk) -> Dict[str, str]:
        return split_keywords(flatten(chunk.description), KEYWORDS)

    def contra_account_number(self, chunk: TransactionChunk) -> Optional[str]:
        cntp = self._keywords(chunk).get("CNTP")
        return _counterparty(cntp)[0] or None if cntp else None

    def contra_account_name(self, chunk: TransactionChunk) -> Optional[str]:
        cntp = self._keywords(chunk).get("CNTP")
        return _counterparty(cntp)[2] or None if cntp else None

    def description(self, chunk: TransactionChunk) -> Optional[str]:
        data = self._keywords(chunk)
        if "REMI" in data:
            return _remittance(data["REMI"])
        return chunk.description

    def subfields(self, chunk: TransactionChunk) -> Dict[str, str]:
        data = self._keywords(chunk)
        if not data:
            return {}

        iban, bic, name, _city = _counterparty(data.get("CNTP", ""))[:4]
        return {
            "eref": data.get("EREF", ""),
            "mref": data.get("MARF", ""),
            "creditor_id": data.get("CSID", ""),
            "purpose": _remittance(data.get("REMI", "")),
            "ultimate_party": data.get("ULTD", "") or data.get("ULTC", ""),
            "iban": iban,
            "bic": bic,
            "account_holder": name,
        }
