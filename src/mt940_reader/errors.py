from __future__ import annotations


class Mt940Error(ValueError):
    """Base de todos los errores por texto MT940 inválido."""


class EmptyInputError(Mt940Error):
    def __init__(self) -> None:
        super().__init__("No text is found for parsing.")


class NoDialectMatchedError(Mt940Error):
    def __init__(self, tried: list[str]) -> None:
        self.tried = tried
        super().__init__(f"No bank dialect accepts this text (tried: {', '.join(tried) or 'none'})")


class MalformedTransactionLineError(Mt940Error):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f'Could not parse transaction line "{line}"')


class MalformedBalanceError(Mt940Error):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f'Cannot parse balance: "{line}"')
