from __future__ import annotations

import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class Account(BaseModel):
    number: Optional[str] = None
    name: Optional[str] = None
    currency: Optional[str] = None


class Balance(BaseModel):
    date: Optional[datetime.date] = None
    currency: Optional[str] = Field(None, description="ISO 4217 code")
    amount: Decimal = Field(Decimal("0"), description="Signed amount. Negative=debit")


class Transaction(BaseModel):
    amount: Decimal = Field(Decimal("0"), description="Signed amount. Negative=debit or reversed credit")
    value_date: Optional[datetime.date] = None
    book_date: Optional[datetime.date] = None
    contra_account: Optional[Account] = None
    description: Optional[str] = None
    supplementary_details: Optional[str] = None

    code: Optional[str] = None
    ref: Optional[str] = None
    bank_ref: Optional[str] = None
    tx_text: Optional[str] = None
    primanota: Optional[str] = None
    ext_code: Optional[str] = None
    eref: Optional[str] = None
    kref: Optional[str] = None
    mref: Optional[str] = None
    creditor_id: Optional[str] = None
    purpose: Optional[str] = None
    original_amount: Optional[str] = None
    charges: Optional[str] = None
    ultimate_party: Optional[str] = None
    bic: Optional[str] = None
    iban: Optional[str] = None
    account_holder: Optional[str] = None


class Statement(BaseModel):
    number: Optional[str] = None
    account: Optional[Account] = None
    opening_balance: Optional[Balance] = None
    closing_balance: Optional[Balance] = None
    transactions: List[Transaction] = Field(default_factory=list)
