from __future__ import annotations

import re
from typing import Dict, Optional

from ..normalize import flatten, split_keywords
from ..segment import TransactionChunk
from .base import BankDialect


SEPA_KEYWORDS = ("TRTP", "IBAN", "BIC", "NAME", "REMI", "EREF", "CSID", "MARF", "ORDP", "BENM", "ADDR")

# formato antiguo: '12.34.56.789 NOMBRE' o 'GIRO  1234567 NOMBRE'
DOTTED_ACCOUNT_RE = re.compile(r"^([0-9.]{11,14}) +(.*)$")
GIRO_ACCOUNT_RE = re.compile(r"^GIRO +([0-9]+) +(.*)$")


class AbnAmro(BankDialect):
    def accept(self, text: str) -> bool:
        return (text or "").startswith("ABNANL")

    def _sepa(self, chunk: TransactionChunk) -> Dict[str, str]:
        return split_keywords(flatten(chunk.description), SEPA_KEYWORDS)

    def _legacy(self, chunk: TransactionChunk) -> Optional[re.Match]:
        first = (chunk.description or "").splitlines()[0] if chunk.description else ""
        return DOTTED_ACCOUNT_RE.match(first) or GIRO_ACCOUNT_RE.match(first)

    def contra_account_number(self, chunk: TransactionChunk) -> Optional[str]:
        sepa = self._sepa(chunk)
        if sepa.get("IBAN"):
            return sepa["IBAN"]

        m = self._legacy(chunk)
        return m.group(1).replace(".", "") if m else None

    def contra_account_name(self, chunk: TransactionChunk) -> Optional[str]:
        sepa = self._sepa(chunk)
        if sepa.get("NAME"):
            return sepa["NAME"]

        m = self._legacy(chunk)
        return m.group(2).strip() or None if m else None

    def description(self, chunk: TransactionChunk) -> Optional[str]:
        sepa = self._sepa(chunk)
        if "REMI" in sepa:
            return sepa["REMI"]
        return chunk.description

    def subfields(self, chunk: TransactionChunk) -> Dict[str, str]:
        sepa = self._sepa(chunk)
        if not sepa:
            return {}
        return {
            "tx_text": sepa.get("TRTP", ""),
            "eref": sepa.get("EREF", ""),
            "creditor_id": sepa.get("CSID", ""),
            "mref": sepa.get("MARF", ""),
            "bic": sepa.get("BIC", ""),
            "iban": sepa.get("IBAN", ""),
            "purpose": sepa.get("REMI", ""),
            "account_holder": sepa.get("NAME", ""),
        }
