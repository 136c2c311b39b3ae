from __future__ import annotations

import re
import logging

from functools import lru_cache
from typing import Any, Iterator, List, Optional, Tuple

from lark import Lark, Token
from lark.lexer import Lexer

from gherkin_ast.constants import (
    BACKGROUND_KEYWORDS,
    EXAMPLES_KEYWORDS,
    FEATURE_KEYWORDS,
    MARKER_COMMENT,
    MARKER_TABLE,
    MARKER_TAG,
    MARKERS_DOCSTRING,
    SCENARIO_KEYWORDS,
    STEP_KEYWORDS,
    TABLE_CELL_ESCAPES,
)
from gherkin_ast.errors import FeatureSyntaxError


logger = logging.getLogger(__name__)


GRAMMAR = r'''
start: feature

feature: tags? FEATURE_KW FEATURE_NAME description? background? scenario+
description: TEXT+
background: BACKGROUND_KW BACKGROUND_NAME step*

scenario: tags? SCENARIO_KW SCENARIO_NAME scenario_steps examples?
scenario_steps: step+
examples: examples_tags? EXAMPLES_KW EXAMPLES_NAME datatable

step: STEP_KW STEP_BODY (docstring | datatable)?
docstring: DOCSTRING

datatable: table_header table_row*
table_header: ROW TABLE_CELL*
table_row: ROW TABLE_CELL*

tags: TAG+
examples_tags: EXAMPLES_TAG+

%declare TAG EXAMPLES_TAG
%declare FEATURE_KW FEATURE_NAME TEXT BACKGROUND_KW BACKGROUND_NAME
%declare SCENARIO_KW SCENARIO_NAME EXAMPLES_KW EXAMPLES_NAME
%declare STEP_KW STEP_BODY DOCSTRING ROW TABLE_CELL
'''

# (keywords, keyword terminal, name terminal)
SECTIONS: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (FEATURE_KEYWORDS, 'FEATURE_KW', 'FEATURE_NAME'),
    (BACKGROUND_KEYWORDS, 'BACKGROUND_KW', 'BACKGROUND_NAME'),
    (SCENARIO_KEYWORDS, 'SCENARIO_KW', 'SCENARIO_NAME'),
    (EXAMPLES_KEYWORDS, 'EXAMPLES_KW', 'EXAMPLES_NAME'),
)

STEP_PATTERN = re.compile(rf'^({"|".join(STEP_KEYWORDS)})(?:\s+(.*))?$')


def _token(type: str, value: str, line: int, column: int) -> Token:
    return Token(type, value, line=line, column=column)


def match_section(stripped_line: str) -> Optional[Tuple[str, str, str, str, int]]:
    """Match a `<keyword>: <name>` line.

    Returns keyword terminal, keyword, name terminal, name and the offset of the name
    from the beginning of the keyword.
    """
    for keywords, keyword_type, name_type in SECTIONS:
        for keyword in keywords:
            if not stripped_line.startswith(f'{keyword}:'):
                continue

            rest = stripped_line[len(keyword) + 1 :]
            offset = len(keyword) + 1 + len(rest) - len(rest.lstrip())

            return keyword_type, keyword, name_type, rest.strip(), offset

    return None


def _is_examples_line(stripped_line: str) -> bool:
    section = match_section(stripped_line)

    return section is not None and section[0] == 'EXAMPLES_KW'


def _tags_belong_to_examples(lines: List[str], index: int) -> bool:
    for line in lines[index + 1 :]:
        stripped_line = line.strip()
        if stripped_line == '' or stripped_line[0] in (MARKER_COMMENT, MARKER_TAG):
            continue

        return _is_examples_line(stripped_line)

    return False


def _tag_tokens(line: str, lineno: int, tag_type: str) -> Iterator[Token]:
    for match in re.finditer(r'\S+', line):
        word = match.group(0)
        column = match.start() + 1

        if word.startswith(MARKER_COMMENT):
            break

        if not word.startswith(MARKER_TAG) or len(word) < 2:
            raise FeatureSyntaxError(f'"{word}" is not a tag', (lineno, column))

        yield _token(tag_type, word, lineno, column)


def _table_tokens(line: str, lineno: int, indentation: int) -> Iterator[Token]:
    yield _token('ROW', line.strip(), lineno, indentation + 1)

    value: List[str] = []
    start = indentation + 1
    index = start

    while index < len(line):
        char = line[index]

        if char == MARKER_TABLE:
            segment = line[start:index]
            # empty cells are positioned right after the opening pipe
            lead = len(segment) - len(segment.lstrip()) if segment.strip() != '' else 0
            column = start + lead + 1
            yield _token('TABLE_CELL', ''.join(value).strip(), lineno, column)
            value = []
            start = index + 1
        elif char == '\\' and index + 1 < len(line) and line[index + 1] in TABLE_CELL_ESCAPES:
            value.append(TABLE_CELL_ESCAPES[line[index + 1]])
            index += 1
        else:
            value.append(char)

        index += 1

    if ''.join(value).strip() != '':
        raise FeatureSyntaxError(f'table row must end with "{MARKER_TABLE}"', (lineno, start + 1))


def tokenize(text: str) -> Iterator[Token]:
    """Classify each line of `text` and produce the tokens the grammar is written for.

    Blank lines and comments produce nothing. Errors are raised when the offending line
    is reached, so an earlier grammar error is always reported first.
    """
    lines = [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]
    index = 0

    while index < len(lines):
        lineno = index + 1
        line = lines[index].rstrip()
        stripped_line = line.strip()
        indentation = len(line) - len(line.lstrip())
        column = indentation + 1

        if stripped_line == '' or stripped_line.startswith(MARKER_COMMENT):
            index += 1
            continue

        if stripped_line.startswith(MARKER_TAG):
            tag_type = 'EXAMPLES_TAG' if _tags_belong_to_examples(lines, index) else 'TAG'
            yield from _tag_tokens(line, lineno, tag_type)
            index += 1
            continue

        marker = next((marker for marker in MARKERS_DOCSTRING if stripped_line.startswith(marker)), None)
        if marker is not None:
            content: List[str] = []
            index += 1
            while index < len(lines) and not lines[index].strip().startswith(marker):
                content.append(lines[index])
                index += 1

            if index >= len(lines):
                raise FeatureSyntaxError('text block is not closed', (lineno, column))

            escaped_marker = ''.join(f'\\{char}' for char in marker)
            docstring = '\n'.join(content).replace(escaped_marker, marker)
            yield _token('DOCSTRING', docstring, lineno, column)
            index += 1
            continue

        if stripped_line.startswith(MARKER_TABLE):
            yield from _table_tokens(line, lineno, indentation)
            index += 1
            continue

        section = match_section(stripped_line)
        if section is not None:
            keyword_type, keyword, name_type, name, offset = section
            yield _token(keyword_type, keyword, lineno, column)
            yield _token(name_type, name, lineno, column + offset)
            index += 1
            continue

        match = STEP_PATTERN.match(stripped_line)
        if match is not None:
            keyword = match.group(1)
            body = match.group(2)
            yield _token('STEP_KW', keyword, lineno, column)
            if body is None:
                yield _token('STEP_BODY', '', lineno, column + len(keyword))
            else:
                yield _token('STEP_BODY', body, lineno, column + match.start(2))
            index += 1
            continue

        yield _token('TEXT', line, lineno, column)
        index += 1


class FeatureLexer(Lexer):
    def __init__(self, lexer_conf: Any) -> None:
        pass

    def lex(self, data: str) -> Iterator[Token]:  # type: ignore[override]
        return tokenize(data)


@lru_cache(maxsize=None)
def get_parser() -> Lark:
    logger.debug('compiling feature grammar')

    return Lark(GRAMMAR, parser='lalr', lexer=FeatureLexer, start='start')
