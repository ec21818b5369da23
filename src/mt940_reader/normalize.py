from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional


def flatten(description: Optional[str]) -> str:
    """Quita los saltos de línea de continuación (CRLF o LF)."""
    return (description or "").replace("\r\n", "").replace("\n", "")


def extract_subfields(
    description: Optional[str],
    table: Mapping[str, str],
    separator: str = "//",
) -> Dict[str, str]:
    """
    Subcampos con prefijo fijo separados por un delimitador doble:
    - se une la descripción en una sola línea
    - se quita un '/' final si lo hay
    - cada segmento se asigna al primer prefijo de la tabla que coincida
    - los segmentos sin prefijo conocido se ignoran
    """
    text = flatten(description)
    if text.endswith("/"):
        text = text[:-1]

    out: Dict[str, str] = {}
    for part in text.split(separator):
        for name, prefix in table.items():
            if part.startswith(prefix):
                out[name] = part[len(prefix):]
                break

    return out


def split_keywords(text: str, keywords: Iterable[str], open_: str = "/", close: str = "/") -> Dict[str, str]:
    """
    Divide un texto del tipo '/IBAN/NL..../NAME/J DOE' o 'EREF+123SVWZ+Texto'
    usando solo las palabras clave conocidas, así los valores pueden contener
    el propio delimitador.
    """
    alternatives = "|".join(re.escape(k) for k in keywords)
    pattern = re.compile(f"{re.escape(open_)}({alternatives}){re.escape(close)}")

    out: Dict[str, str] = {}
    matches = list(pattern.finditer(text))
    for idx, m in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        value = text[m.end():end].strip()
        if open_:
            value = value.rstrip(open_).strip()
        # la primera aparición manda
        out.setdefault(m.group(1), value)

    return out
