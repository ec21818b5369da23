from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from .errors import MalformedBalanceError, MalformedTransactionLineError


TRANSACTION_RE = re.compile(
    r"^(?P<value_date>\d{6})"
    r"(?P<book_date>\d{4})?"
    r"(?P<code>(?:C|D|RD|RC)R?)"
    r"(?P<amount>[0-9,]{1,15})"
    r"(?P<type>[NFS][A-Z0-9]{3})?"
    r"(?P<ref>(?:(?!//)[^\r\n])*)"
    r"(?://(?P<bank_ref>[^\r\n]*))?"
)

BALANCE_RE = re.compile(r"(C|D)(\d{6})([A-Z]{3})([0-9,]{1,15})")

# débito y crédito reversado restan
NEGATIVE_CODES = frozenset({"D", "DR", "RC", "RCR"})


@dataclass(frozen=True)
class TransactionLine:
    value_date: datetime.date
    book_date: Optional[datetime.date]
    code: str
    amount: Decimal
    type_code: str
    reference: str
    bank_reference: str


@dataclass(frozen=True)
class ParsedBalance:
    date: datetime.date
    currency: str
    amount: Decimal


def parse_amount(raw: str) -> Decimal:
    # 1234,56 -> 1234.56
    return Decimal(raw.replace(",", "."))


def signed_amount(code: str, amount: Decimal) -> Decimal:
    return -amount if code in NEGATIVE_CODES else amount


def parse_date(raw: str) -> datetime.date:
    return datetime.datetime.strptime(raw, "%y%m%d").date()


def resolve_book_date(value_date: datetime.date, fragment: str) -> datetime.date:
    """
    El fragmento MMDD no trae año: se prueban año anterior, mismo año y año
    siguiente al de la fecha valor y gana el más cercano (el primero en ese
    orden si hay empate).
    Ej: valor 2016-01-04 + '1228' -> 2015-12-28
    """
    month = int(fragment[:2])
    day = int(fragment[2:])

    candidates: List[datetime.date] = []
    for year in (value_date.year - 1, value_date.year, value_date.year + 1):
        try:
            candidates.append(datetime.date(year, month, day))
        except ValueError:
            # 29/02 fuera de año bisiesto
            continue

    if not candidates:
        raise ValueError(f"No valid book date for fragment {fragment!r}")

    return min(candidates, key=lambda d: abs((d - value_date).days))


def parse_transaction_line(line: str) -> TransactionLine:
    """
    Gramática común de ':61:' para todos los bancos:
    fecha valor (YYMMDD), fecha contable opcional (MMDD), código C/D/RC/RD
    (+R opcional) e importe con coma decimal. Falla si no matchea al inicio.
    """
    m = TRANSACTION_RE.match(line or "")
    if not m:
        raise MalformedTransactionLineError(line)

    try:
        value_date = parse_date(m.group("value_date"))
        book_date = None
        if m.group("book_date"):
            book_date = resolve_book_date(value_date, m.group("book_date"))
        amount = signed_amount(m.group("code"), parse_amount(m.group("amount")))
    except (ValueError, InvalidOperation) as e:
        raise MalformedTransactionLineError(line) from e

    return TransactionLine(
        value_date=value_date,
        book_date=book_date,
        code=m.group("code"),
        amount=amount,
        type_code=m.group("type") or "",
        reference=(m.group("ref") or "").strip(),
        bank_reference=(m.group("bank_ref") or "").strip(),
    )


def parse_balance(line: str) -> ParsedBalance:
    m = BALANCE_RE.search(line or "")
    if not m:
        raise MalformedBalanceError(line)

    try:
        amount = parse_amount(m.group(4))
        date = parse_date(m.group(2))
    except (ValueError, InvalidOperation) as e:
        raise MalformedBalanceError(line) from e

    if m.group(1) == "D":
        amount = -amount

    return ParsedBalance(date=date, currency=m.group(3), amount=amount)
