from __future__ import annotations

import string
from itertools import cycle


# pesos del dígito de control español (CCC), de izquierda a derecha
CCC_WEIGHTS = (1, 2, 4, 8, 5, 10, 9, 7, 3, 6)


def control_digit(digits: str) -> int:
    """
    Módulo 11 ponderado. Los pesos se alinean con los dígitos de la derecha
    (equivale a rellenar con ceros a la izquierda hasta 10) y ciclan si hay más.
    Resto 11 -> 0, resto 10 -> 1.
    """
    if not digits.isdigit():
        raise ValueError(f"Not a numeric string: {digits!r}")

    weights = cycle(reversed(CCC_WEIGHTS))
    total = sum(int(d) * w for d, w in zip(reversed(digits), weights))

    dc = 11 - total % 11
    if dc == 11:
        return 0
    if dc == 10:
        return 1
    return dc


def ccc_check_digits(entity: str, office: str, account: str) -> str:
    # primer dígito: entidad + oficina, segundo: número de cuenta
    return f"{control_digit(entity + office)}{control_digit(account)}"


def _numeric(text: str) -> str:
    # A=10 ... Z=35
    return "".join(str(int(ch, 36)) if ch in string.ascii_letters else ch for ch in text.upper())


def iban_check_digits(country: str, bban: str) -> str:
    """ISO 7064 MOD 97-10: 98 - (BBAN + país + '00') mod 97."""
    value = int(_numeric(bban + country + "00"))
    return f"{98 - value % 97:02d}"


def is_valid_iban(iban: str) -> bool:
    iban = iban.replace(" ", "").upper()
    if len(iban) < 5 or not iban[:2].isalpha() or not iban[2:4].isdigit() or not iban.isalnum():
        return False
    return int(_numeric(iban[4:] + iban[:4])) % 97 == 1


def spanish_iban(entity: str, office: str, account: str) -> str:
    """
    IBAN a partir de un CCC sin dígitos de control.
    Ej: 2100 / 0418 / 0200051332 -> ES9121000418450200051332
    """
    bban = entity + office + ccc_check_digits(entity, office, account) + account
    return "ES" + iban_check_digits("ES", bban) + bban
