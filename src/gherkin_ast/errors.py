from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from lark import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from gherkin_ast.model import Position


TERMINAL_DESCRIPTIONS: Dict[str, str] = {
    'TAG': 'tag',
    'EXAMPLES_TAG': 'tag',
    'FEATURE_KW': '"Feature:"',
    'FEATURE_NAME': 'feature name',
    'TEXT': 'description',
    'BACKGROUND_KW': '"Background:"',
    'BACKGROUND_NAME': 'background name',
    'SCENARIO_KW': '"Scenario:"',
    'SCENARIO_NAME': 'scenario name',
    'EXAMPLES_KW': '"Examples:"',
    'EXAMPLES_NAME': 'examples name',
    'STEP_KW': 'step',
    'STEP_BODY': 'step text',
    'DOCSTRING': 'text block',
    'ROW': 'table row',
    'TABLE_CELL': 'table cell',
    '$END': 'end of file',
}


def describe_terminal(name: str) -> str:
    return TERMINAL_DESCRIPTIONS.get(name, name)


class ParseError(Exception):
    """Base class of everything that can go wrong when parsing a feature."""

    message: str
    position: Position

    def __init__(self, message: str, position: Position) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    @property
    def line(self) -> int:
        return self.position[0]

    @property
    def column(self) -> int:
        return self.position[1]

    def __str__(self) -> str:
        return f'{self.message} (line {self.line}, column {self.column})'


class FeatureSyntaxError(ParseError):
    """The text does not have the shape of a feature document.

    `expected` holds the grammar terminals that would have been accepted at `position`,
    and is empty when the error was raised with a custom message by the lexer.
    """

    expected: FrozenSet[str]
    found: Optional[str]

    def __init__(
        self,
        message: str,
        position: Position,
        *,
        expected: Optional[Iterable[str]] = None,
        found: Optional[str] = None,
    ) -> None:
        super().__init__(message, position)
        self.expected = frozenset(expected or ())
        self.found = found


class ContextError(ParseError):
    """`And` or `But` was used without a preceding step to take its type from."""


class ConstructionError(ParseError):
    """A required part could not be found in the parse tree."""


def end_of_text(text: str) -> Position:
    line = text.count('\n') + 1
    column = len(text) - (text.rfind('\n') + 1) + 1

    return line, column


def _expected_message(expected: Iterable[str]) -> str:
    descriptions: List[str] = sorted({describe_terminal(name) for name in expected})

    if len(descriptions) < 1:
        return ''

    return f', expected {" or ".join(descriptions)}'


def from_unexpected_input(error: UnexpectedInput, text: str) -> FeatureSyntaxError:
    if isinstance(error, UnexpectedToken):
        token = error.token
        expected = set(error.expected)

        if token.type == '$END':
            return FeatureSyntaxError(
                f'unexpected end of file{_expected_message(expected)}',
                end_of_text(text),
                expected=expected,
                found=token.type,
            )

        return FeatureSyntaxError(
            f'unexpected "{token.value.strip()}"{_expected_message(expected)}',
            (token.line, token.column),
            expected=expected,
            found=token.type,
        )

    if isinstance(error, UnexpectedEOF):
        expected = set(error.expected)

        return FeatureSyntaxError(
            f'unexpected end of file{_expected_message(expected)}',
            end_of_text(text),
            expected=expected,
            found='$END',
        )

    if isinstance(error, UnexpectedCharacters):
        return FeatureSyntaxError(
            f'unexpected character "{error.char}"',
            (error.line, error.column),
            expected=error.allowed,
        )

    return FeatureSyntaxError(str(error), error_position(error))


def error_position(error: Union[ParseError, UnexpectedInput]) -> Position:
    if isinstance(error, ParseError):
        return error.position

    line = getattr(error, 'line', -1)
    column = getattr(error, 'column', -1)

    if not isinstance(line, int) or not isinstance(column, int) or line < 1 or column < 1:
        return 0, 0

    return line, column
