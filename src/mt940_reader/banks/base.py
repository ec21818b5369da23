from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..builders import DEFAULT_BUILDERS, Builders
from ..parse import parse_balance, parse_transaction_line
from ..segment import (
    Field,
    TransactionChunk,
    detect_line_break,
    get_field,
    split_statements,
    split_transactions,
    tokenize,
)

logger = logging.getLogger(__name__)


class BankDialect:
    """
    Variante MT940 de un banco. La gramática común (split de statements,
    campos, ':61:' y saldos) vive en funciones sueltas; cada banco solo
    sobreescribe accept() y los hooks de subcampos que necesite.
    """

    def accept(self, text: str) -> bool:
        raise NotImplementedError

    def decode(self, text: str, builders: Builders = DEFAULT_BUILDERS) -> List[Any]:
        line_break = detect_line_break(text)

        statements: List[Any] = []
        for chunk in split_statements(text):
            statement = self.statement(chunk, builders, line_break)
            if statement is not None:
                statements.append(statement)

        return statements

    # --- statement ---

    def statement(self, text: str, builders: Builders, line_break: str = "\r\n") -> Optional[Any]:
        fields = tokenize(text)

        account_number = self.account_number(fields)
        account = builders.create_account(account_number)
        if account is None:
            logger.debug("account %s vetoed by builder, skipping statement", account_number)
            return None
        account.number = account_number

        number = self.statement_number(fields)
        statement = builders.create_statement(account, number)
        if statement is None:
            logger.debug("statement %s vetoed by builder", number)
            return None

        opening = self.balance(builders.create_opening_balance(), get_field(fields, "60F", "60M"))
        closing = self.balance(builders.create_closing_balance(), get_field(fields, "62F", "62M"))

        # la cuenta hereda la divisa del saldo inicial
        if opening is not None and getattr(account, "currency", None) is None:
            account.currency = opening.currency

        statement.account = account
        statement.number = number
        statement.opening_balance = opening
        statement.closing_balance = closing
        statement.transactions = [
            self.transaction(chunk, builders) for chunk in split_transactions(fields, line_break)
        ]
        return statement

    def account_number(self, fields: List[Field]) -> Optional[str]:
        number = get_field(fields, "25")
        return number.strip() if number else None

    def statement_number(self, fields: List[Field]) -> Optional[str]:
        return get_field(fields, "28", "28C")

    def balance(self, balance: Any, line: Optional[str]) -> Optional[Any]:
        # etiqueta presente pero vacía: se trata como ausente
        if line is None or not line.strip() or balance is None:
            return None

        parsed = parse_balance(line)
        balance.date = parsed.date
        balance.currency = parsed.currency
        balance.amount = parsed.amount
        return balance

    # --- transaction ---

    def transaction(self, chunk: TransactionChunk, builders: Builders) -> Any:
        parsed = parse_transaction_line(chunk.line)

        tx = builders.create_transaction()
        tx.amount = parsed.amount
        tx.value_date = parsed.value_date
        tx.book_date = parsed.book_date
        tx.supplementary_details = chunk.line
        tx.code = parsed.type_code
        tx.ref = parsed.reference
        tx.bank_ref = parsed.bank_reference
        tx.contra_account = self.contra_account(chunk, builders)
        tx.description = self.description(chunk)

        for name, value in self.subfields(chunk).items():
            setattr(tx, name, value)

        return tx

    def contra_account(self, chunk: TransactionChunk, builders: Builders) -> Optional[Any]:
        number = self.contra_account_number(chunk)
        name = self.contra_account_name(chunk)
        if not number and not name:
            return None

        account = builders.create_contra_account(number)
        if account is None:
            return None
        account.number = number
        account.name = name
        return account

    def contra_account_number(self, chunk: TransactionChunk) -> Optional[str]:
        return None

    def contra_account_name(self, chunk: TransactionChunk) -> Optional[str]:
        return None

    def description(self, chunk: TransactionChunk) -> Optional[str]:
        return chunk.description

    def subfields(self, chunk: TransactionChunk) -> Dict[str, str]:
        return {}
