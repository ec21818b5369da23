from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .banks.abn_amro import AbnAmro
from .banks.base import BankDialect
from .banks.bnp import Bnp
from .banks.caixabank import CaixaBank
from .banks.german import Commerzbank, DeutscheBank
from .banks.ing import Ing
from .banks.sns import Sns
from .builders import DEFAULT_BUILDERS, Builders
from .errors import EmptyInputError, NoDialectMatchedError

logger = logging.getLogger(__name__)


# orden de prueba: gana el primero que acepta el texto
DEFAULT_DIALECTS: Tuple[Tuple[str, Any], ...] = (
    ("ABN-AMRO", AbnAmro),
    ("ING", Ing),
    ("Sns", Sns),
    ("Deutsche Bank", DeutscheBank),
    ("Commerzbank", Commerzbank),
    ("BNP", Bnp),
    ("CaixaBank", CaixaBank),
)


def _instance(dialect: Any) -> BankDialect:
    # el registro acepta la clase o una instancia ya creada
    return dialect() if isinstance(dialect, type) else dialect


class Reader:
    """
    Punto de entrada: elige el dialecto del banco y le delega el decode.
    El registro se configura antes de usar el Reader desde varios hilos.
    """

    def __init__(self, dialects: Optional[Mapping[str, Any]] = None, builders: Optional[Builders] = None):
        self._dialects: Dict[str, Any] = dict(DEFAULT_DIALECTS if dialects is None else dialects)
        self.builders = builders or DEFAULT_BUILDERS

    @staticmethod
    def get_default_dialects() -> Dict[str, Any]:
        return dict(DEFAULT_DIALECTS)

    def get_dialects(self) -> Dict[str, Any]:
        return dict(self._dialects)

    def set_dialects(self, dialects: Mapping[str, Any]) -> None:
        self._dialects = dict(dialects)

    def add_dialect(self, name: str, dialect: Any, before: Optional[str] = None) -> None:
        """
        Registra un dialecto. Con `before` se coloca justo delante de ese
        nombre; si no existe (o no se indica) va al final.
        """
        items = [(k, v) for k, v in self._dialects.items() if k != name]
        index = next((i for i, (k, _) in enumerate(items) if k == before), len(items))
        items.insert(index, (name, dialect))
        self._dialects = dict(items)

    def decode(self, text: str) -> List[Any]:
        if not text:
            raise EmptyInputError()

        for name, dialect in self._dialects.items():
            impl = _instance(dialect)
            if impl.accept(text):
                logger.debug("decoding with dialect %s", name)
                statements = impl.decode(text, self.builders)
                logger.debug("%s: %d statement(s) decoded", name, len(statements))
                return statements

        raise NoDialectMatchedError(list(self._dialects))
