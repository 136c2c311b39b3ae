from __future__ import annotations

import logging

from typing import Any, List, Sequence

from pygls.workspace import TextDocument
from lsprotocol import types as lsp

from gherkin_ast.constants import DIAGNOSTIC_SOURCE
from gherkin_ast.errors import ParseError
from gherkin_ast.parser import parse


logger = logging.getLogger(__name__)


class FeatureDiagnostic(lsp.Diagnostic):
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FeatureDiagnostic):
            return False

        if self.message != other.message or self.severity != other.severity or self.source != other.source:
            return False

        return self.range == other.range

    def __hash__(self) -> int:  # type: ignore[override]
        return hash((self.range.start.line, self.range.start.character, self.range.end.line, self.range.end.character, self.message, self.severity, self.source))


def to_diagnostic(error: ParseError, lines: Sequence[str]) -> FeatureDiagnostic:
    # lsp positions are zero based, parse errors are not
    line = max(error.line - 1, 0)
    character = max(error.column - 1, 0)

    if line < len(lines):
        end_character = max(len(lines[line].rstrip('\r\n')), character)
    else:
        end_character = character

    return FeatureDiagnostic(
        range=lsp.Range(
            start=lsp.Position(line=line, character=character),
            end=lsp.Position(line=line, character=end_character),
        ),
        message=error.message,
        severity=lsp.DiagnosticSeverity.Error,
        source=DIAGNOSTIC_SOURCE,
    )


def validate_feature(text_document: TextDocument) -> List[lsp.Diagnostic]:
    source = text_document.source

    try:
        parse(source)
    except ParseError as e:
        logger.debug(f'{text_document.uri}: {e}')
        return [to_diagnostic(e, source.split('\n'))]

    return []
