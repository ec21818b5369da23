from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .models import Account, Balance, Statement, Transaction


# una clase (se instancia sin argumentos) o una función que recibe contexto
Factory = Union[type, Callable[..., Any]]


def _build(factory: Factory, *context: Any) -> Any:
    if isinstance(factory, type):
        return factory()
    return factory(*context)


@dataclass(frozen=True)
class Builders:
    """
    Cómo se construye cada registro. Las funciones reciben:
    - statement(account, number)
    - account(number) / contra_account(number)
    - opening_balance(), closing_balance(), transaction()
    Si statement o account devuelven None, ese statement se omite.
    """

    statement: Factory = Statement
    account: Factory = Account
    contra_account: Factory = Account
    opening_balance: Factory = Balance
    closing_balance: Factory = Balance
    transaction: Factory = Transaction

    def create_statement(self, account: Any, number: Optional[str]) -> Any:
        return _build(self.statement, account, number)

    def create_account(self, number: Optional[str]) -> Any:
        return _build(self.account, number)

    def create_contra_account(self, number: Optional[str]) -> Any:
        return _build(self.contra_account, number)

    def create_opening_balance(self) -> Any:
        return _build(self.opening_balance)

    def create_closing_balance(self) -> Any:
        return _build(self.closing_balance)

    def create_transaction(self) -> Any:
        return _build(self.transaction)


DEFAULT_BUILDERS = Builders()
