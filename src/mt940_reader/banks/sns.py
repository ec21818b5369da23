from __future__ import annotations

import re
from typing import Optional

from ..segment import TransactionChunk, header
from .base import BankDialect


# '0987654321 marechal s' -> cuenta + nombre en la primera línea del :86:
CONTRA_RE = re.compile(r"^([0-9.]+)\s+([^\r\n]*)")


class Sns(BankDialect):
    """SNS Bank: la descripción se entrega tal cual, con sus saltos de línea."""

    def accept(self, text: str) -> bool:
        if not text:
            return False
        return "SNSBNL2A" in header(text)

    def contra_account_number(self, chunk: TransactionChunk) -> Optional[str]:
        m = CONTRA_RE.match(chunk.description or "")
        if not m:
            return None
        return m.group(1).replace(".", "").lstrip("0") or None

    def contra_account_name(self, chunk: TransactionChunk) -> Optional[str]:
        m = CONTRA_RE.match(chunk.description or "")
        return m.group(2).strip() or None if m else None
