from __future__ import annotations

from pathlib import Path

import pytest

from mt940_reader.banks.base import BankDialect


FIXTURES = Path(__file__).resolve().parent / "fixtures"


def read_document(name: str) -> str:
    """
    Los ficheros de ejemplo se guardan con LF; MT940 viaja con CRLF.
    read_text() ya normaliza a '\\n', así que el resultado siempre es CRLF.
    """
    path = FIXTURES / name
    assert path.exists(), f"No existe el fixture: {path}"
    return path.read_text(encoding="utf-8").replace("\n", "\r\n")


class GenericDialect(BankDialect):
    """Dialecto de prueba: acepta solo el documento genérico."""

    def accept(self, text: str) -> bool:
        return text[:11] == ":20:GENERIC"


@pytest.fixture
def load_document():
    return read_document


@pytest.fixture
def generic_text() -> str:
    return read_document("generic.txt")
