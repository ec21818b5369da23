from __future__ import annotations

import re
from typing import List, Optional

from ..checksum import iban_check_digits, is_valid_iban, spanish_iban
from ..segment import Field
from .base import BankDialect


CAIXABANK_ENTITY = "2100"

SEPARATORS_RE = re.compile(r"[\s/.-]")


def derive_account_iban(raw: str, entity: str = CAIXABANK_ENTITY) -> str:
    """
    CaixaBank a veces manda en ':25:' la cuenta antigua en vez del IBAN:
    - oficina(4) + cuenta(10)                -> se usa la entidad del banco
    - entidad(4) + oficina(4) + cuenta(10)   -> CCC sin dígitos de control
    - CCC completo de 20 dígitos             -> solo falta el control IBAN
    Cualquier otra cosa se devuelve tal cual.
    """
    compact = SEPARATORS_RE.sub("", raw)

    if is_valid_iban(compact):
        return compact.upper()
    if re.fullmatch(r"\d{14}", compact):
        return spanish_iban(entity, compact[:4], compact[4:])
    if re.fullmatch(r"\d{18}", compact):
        return spanish_iban(compact[:4], compact[4:8], compact[8:])
    if re.fullmatch(r"\d{20}", compact):
        return "ES" + iban_check_digits("ES", compact) + compact
    return raw


class CaixaBank(BankDialect):
    def accept(self, text: str) -> bool:
        if not text:
            return False
        return "I940CAIXESBBAXXX" in text

    def account_number(self, fields: List[Field]) -> Optional[str]:
        number = super().account_number(fields)
        return derive_account_iban(number) if number else number
