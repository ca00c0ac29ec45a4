from __future__ import annotations

from . import rules


class CsvIntakeError(Exception):
    """Base for every failure that ends an upload attempt.

    ``message`` is the text shown to the user.
    """

    default_message = "CSV intake failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidExtension(CsvIntakeError):
    default_message = rules.MSG_INVALID_EXTENSION


class TokenizerFailure(CsvIntakeError):
    default_message = rules.MSG_TOKENIZER_FAILURE


class EmptyInput(CsvIntakeError):
    default_message = rules.MSG_EMPTY_INPUT


class NoHeaderFound(CsvIntakeError):
    default_message = rules.MSG_NO_HEADER


class ParserFailure(CsvIntakeError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{rules.MSG_PARSER_FAILURE_PREFIX}{detail}")
