from __future__ import annotations

import re
from typing import Dict, Optional

from ..normalize import flatten, split_keywords
from ..segment import TransactionChunk
from .base import BankDialect


SUBFIELD_RE = re.compile(r"\?(\d{2})")

PURPOSE_KEYS = [f"{n:02d}" for n in range(20, 30)] + ["60", "61", "62", "63"]

SEPA_KEYWORDS = ("EREF", "KREF", "MREF", "CRED", "DEBT", "SVWZ", "ABWA", "ABWE", "OAMT", "COAM")


def structured_fields(description: Optional[str]) -> Dict[str, str]:
    """
    ':86:' estructurado alemán: 'GVC?00texto?10primanota?20...?30BIC?31IBAN?32nombre'.
    Devuelve las subclaves '?NN' y bajo 'gvc' los 3 dígitos iniciales.
    Un texto libre sin subcampos no tiene GVC.
    """
    text = flatten(description)
    parts = SUBFIELD_RE.split(text)

    gvc = parts[0][:3]
    structured = len(parts) > 1 and len(gvc) == 3 and gvc.isdigit()

    out: Dict[str, str] = {"gvc": gvc if structured else ""}
    for key, value in zip(parts[1::2], parts[2::2]):
        # algunos bancos repiten la clave para continuar el texto
        out[key] = out.get(key, "") + value
    return out


def purpose_text(fields: Dict[str, str]) -> str:
    return "".join(fields[k] for k in PURPOSE_KEYS if k in fields)


class GermanDialect(BankDialect):
    """
    Bancos alemanes con ':86:' en formato '?NN' y palabras clave SEPA
    (EREF+, MREF+, CRED+, SVWZ+ ...) dentro del propósito.
    """

    def _sepa(self, fields: Dict[str, str]) -> Dict[str, str]:
        return split_keywords(purpose_text(fields), SEPA_KEYWORDS, open_="", close="+")

    def contra_account_number(self, chunk: TransactionChunk) -> Optional[str]:
        return structured_fields(chunk.description).get("31") or None

    def contra_account_name(self, chunk: TransactionChunk) -> Optional[str]:
        fields = structured_fields(chunk.description)
        name = (fields.get("32", "") + fields.get("33", "")).strip()
        return name or None

    def description(self, chunk: TransactionChunk) -> Optional[str]:
        if chunk.description is None:
            return None
        fields = structured_fields(chunk.description)
        sepa = self._sepa(fields)
        return sepa.get("SVWZ") or purpose_text(fields) or chunk.description

    def subfields(self, chunk: TransactionChunk) -> Dict[str, str]:
        if chunk.description is None:
            return {}

        fields = structured_fields(chunk.description)
        sepa = self._sepa(fields)
        return {
            "ext_code": fields["gvc"],
            "tx_text": fields.get("00", ""),
            "primanota": fields.get("10", ""),
            "bic": fields.get("30", ""),
            "iban": fields.get("31", ""),
            "account_holder": (fields.get("32", "") + fields.get("33", "")).strip(),
            "eref": sepa.get("EREF", ""),
            "kref": sepa.get("KREF", ""),
            "mref": sepa.get("MREF", ""),
            "creditor_id": sepa.get("CRED", ""),
            "purpose": sepa.get("SVWZ", "") or purpose_text(fields),
            "original_amount": sepa.get("OAMT", ""),
            "charges": sepa.get("COAM", ""),
            "ultimate_party": sepa.get("ABWA", "") or sepa.get("ABWE", ""),
        }


def _sender(text: str, bic_prefix: str) -> bool:
    # BIC del emisor en el bloque 1 de la cabecera SWIFT
    return bool(text) and f"F01{bic_prefix}" in text


class DeutscheBank(GermanDialect):
    def accept(self, text: str) -> bool:
        return _sender(text, "DEUTDE")


class Commerzbank(GermanDialect):
    def accept(self, text: str) -> bool:
        return _sender(text, "COBADE")
