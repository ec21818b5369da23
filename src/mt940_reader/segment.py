from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional


STATEMENT_START_RE = re.compile(r"^:20:", re.MULTILINE)
TAG_RE = re.compile(r"^:(\d{2}[A-Z]?):")
# fin del bloque 4 ('-}' o '-') o inicio de otro bloque SWIFT ('{5:...')
TRAILER_RE = re.compile(r"^(?:-\}|-\s*$|\{\d:)")


@dataclass(frozen=True)
class Field:
    tag: str
    content: str        # incluye las líneas de continuación con sus saltos originales


@dataclass(frozen=True)
class TransactionChunk:
    line: str                   # contenido de :61:
    description: Optional[str]  # uno o más :86: consecutivos


def detect_line_break(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def header(text: str) -> str:
    """Cabecera SWIFT / del banco: todo lo anterior al primer ':20:'."""
    m = STATEMENT_START_RE.search(text)
    return text[: m.start()] if m else text


def split_statements(text: str) -> List[str]:
    """
    Separa el texto en statements:
    - cada statement empieza con ':20:' al inicio de línea
    - lo que va antes del primer ':20:' (cabecera SWIFT) se descarta
    """
    chunks = STATEMENT_START_RE.split(text)[1:]
    return [":20:" + c.strip() for c in chunks if c.strip()]


def tokenize(statement: str) -> List[Field]:
    """
    Agrupa las líneas físicas en campos lógicos ':TAG:contenido'.
    Una línea sin marcador de tag es continuación del campo anterior y se
    vuelve a unir conservando el salto de línea tal cual.
    """
    fields: List[Field] = []
    tag: Optional[str] = None
    parts: List[str] = []

    def flush() -> None:
        if tag is not None:
            fields.append(Field(tag=tag, content="".join(parts).rstrip()))

    for physical in statement.splitlines(keepends=True):
        m = TAG_RE.match(physical)
        if m:
            flush()
            tag = m.group(1)
            parts = [physical[m.end():]]
        elif TRAILER_RE.match(physical):
            flush()
            tag = None
        elif tag is not None:
            parts.append(physical)

    flush()
    return fields


def get_field(fields: List[Field], *tags: str) -> Optional[str]:
    for f in fields:
        if f.tag in tags:
            return f.content
    return None


def split_transactions(fields: List[Field], line_break: str = "\r\n") -> List[TransactionChunk]:
    """
    Cada ':61:' abre una transacción; los ':86:' que le siguen inmediatamente
    son su descripción.
    """
    chunks: List[TransactionChunk] = []
    i = 0

    while i < len(fields):
        if fields[i].tag != "61":
            i += 1
            continue

        line = fields[i].content
        i += 1

        info: List[str] = []
        while i < len(fields) and fields[i].tag == "86":
            info.append(fields[i].content)
            i += 1

        chunks.append(TransactionChunk(line=line, description=line_break.join(info) if info else None))

    return chunks
