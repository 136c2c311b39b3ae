from __future__ import annotations

import logging

from typing import List, Optional, Tuple, Union

from lark import Token, Tree
from ordered_set import OrderedSet

from gherkin_ast.constants import STEP_KEYWORDS_CONTINUATION
from gherkin_ast.errors import ConstructionError, ContextError, FeatureSyntaxError
from gherkin_ast.model import Background, Examples, Feature, Position, Scenario, Step, StepKind, Table
from gherkin_ast.text import dedent


logger = logging.getLogger(__name__)

Node = Union[Tree, Token]


def _position(token: Token) -> Position:
    return token.line, token.column


def _first_position(tree: Tree) -> Position:
    for token in tree.scan_values(lambda value: isinstance(value, Token)):
        return _position(token)

    return 0, 0


def _is_rule(node: Node, *names: str) -> bool:
    return isinstance(node, Tree) and node.data in names


def _is_terminal(node: Node, *types: str) -> bool:
    return isinstance(node, Token) and node.type in types


def resolve_step_kind(keyword: str, context: Optional[StepKind], position: Position) -> StepKind:
    for kind in StepKind:
        if keyword == kind.value:
            return kind

    if keyword in STEP_KEYWORDS_CONTINUATION:
        if context is None:
            raise ContextError(f'"{keyword}" must come after another step', position)

        return context

    raise ConstructionError(f'"{keyword}" is not a step keyword', position)


def parse_tags(tree: Tree) -> Tuple[str, ...]:
    tags: OrderedSet[str] = OrderedSet()

    for node in tree.children:
        if _is_terminal(node, 'TAG', 'EXAMPLES_TAG'):
            tags.add(node.value)

    return tuple(tags)


def _build_description(tree: Tree) -> str:
    lines: List[str] = []
    previous_line: Optional[int] = None

    for token in tree.children:
        if not isinstance(token, Token):
            continue

        # keep blank lines and comments between description lines as empty lines
        if previous_line is not None:
            lines.extend([''] * (token.line - previous_line - 1))

        lines.append(token.value)
        previous_line = token.line

    return dedent('\n'.join(lines))


def _build_docstring(tree: Tree) -> str:
    token = next((node for node in tree.children if _is_terminal(node, 'DOCSTRING')), None)

    if token is None:
        raise ConstructionError('text block has no content', _first_position(tree))

    return dedent(token.value).rstrip().lstrip('\r\n')


def _row_from_children(tree: Tree) -> Tuple[Position, Tuple[str, ...]]:
    position: Optional[Position] = None
    cells: List[str] = []

    for node in tree.children:
        if _is_terminal(node, 'ROW'):
            position = _position(node)
        elif _is_terminal(node, 'TABLE_CELL'):
            cells.append(node.value.strip())

    if position is None:
        raise ConstructionError('table row has no start', _first_position(tree))

    return position, tuple(cells)


def build_table(tree: Tree) -> Table:
    header: Optional[Tuple[str, ...]] = None
    position: Optional[Position] = None
    rows: List[Tuple[str, ...]] = []

    for node in tree.children:
        if _is_rule(node, 'table_header'):
            position, header = _row_from_children(node)
        elif _is_rule(node, 'table_row'):
            row_position, row = _row_from_children(node)
            if header is not None and len(row) != len(header):
                raise FeatureSyntaxError(
                    f'table row has {len(row)} cells, expected {len(header)} as in the header',
                    row_position,
                )
            rows.append(row)

    if header is None or position is None:
        raise ConstructionError('table has no header', _first_position(tree))

    return Table(header=header, rows=tuple(rows), position=position)


def build_step(tree: Tree, context: Optional[StepKind]) -> Step:
    keyword: Optional[Token] = None
    text: Optional[str] = None
    docstring: Optional[str] = None
    table: Optional[Table] = None

    for node in tree.children:
        if _is_terminal(node, 'STEP_KW'):
            keyword = node
        elif _is_terminal(node, 'STEP_BODY'):
            text = node.value
        elif _is_rule(node, 'docstring'):
            docstring = _build_docstring(node)
        elif _is_rule(node, 'datatable'):
            table = build_table(node)
        else:
            raise ConstructionError(f'unhandled node in step: {node!r}', _first_position(tree))

    if keyword is None or text is None:
        raise ConstructionError('step is missing its keyword or text', _first_position(tree))

    position = _position(keyword)
    kind = resolve_step_kind(keyword.value, context, position)

    return Step(
        kind=kind,
        keyword=keyword.value,
        text=text,
        position=position,
        docstring=docstring,
        table=table,
    )


def build_steps(tree: Tree) -> Tuple[Step, ...]:
    steps: List[Step] = []
    context: Optional[StepKind] = None

    for node in tree.children:
        if not _is_rule(node, 'step'):
            continue

        step = build_step(node, context)
        context = step.kind
        steps.append(step)

    return tuple(steps)


def build_background(tree: Tree) -> Background:
    keyword = next((node for node in tree.children if _is_terminal(node, 'BACKGROUND_KW')), None)

    if keyword is None:
        raise ConstructionError('background is missing its keyword', _first_position(tree))

    return Background(steps=build_steps(tree), position=_position(keyword))


def build_examples(tree: Tree) -> Examples:
    position: Optional[Position] = None
    table: Optional[Table] = None
    tags: Optional[Tuple[str, ...]] = None

    for node in tree.children:
        if _is_terminal(node, 'EXAMPLES_KW'):
            position = _position(node)
        elif _is_rule(node, 'datatable'):
            table = build_table(node)
        elif _is_rule(node, 'examples_tags'):
            tags = parse_tags(node)

    if position is None or table is None:
        raise ConstructionError('examples is missing its keyword or table', _first_position(tree))

    return Examples(table=table, position=position, tags=tags)


def build_scenario(tree: Tree) -> Scenario:
    name: Optional[Token] = None
    steps: Optional[Tuple[Step, ...]] = None
    examples: Optional[Examples] = None
    tags: Optional[Tuple[str, ...]] = None

    for node in tree.children:
        if _is_terminal(node, 'SCENARIO_NAME'):
            name = node
        elif _is_rule(node, 'scenario_steps'):
            steps = build_steps(node)
        elif _is_rule(node, 'examples'):
            examples = build_examples(node)
        elif _is_rule(node, 'tags'):
            tags = parse_tags(node)

    if name is None or steps is None:
        raise ConstructionError('scenario is missing its name or steps', _first_position(tree))

    return Scenario(
        name=name.value,
        steps=steps,
        position=_position(name),
        examples=examples,
        tags=tags,
    )


def build_feature(tree: Tree) -> Feature:
    name: Optional[str] = None
    position: Optional[Position] = None
    description: Optional[str] = None
    background: Optional[Background] = None
    scenarios: List[Scenario] = []
    tags: Optional[Tuple[str, ...]] = None

    for node in tree.children:
        if _is_terminal(node, 'FEATURE_KW'):
            position = _position(node)
        elif _is_terminal(node, 'FEATURE_NAME'):
            name = node.value
        elif _is_rule(node, 'description'):
            value = _build_description(node)
            if value != '':
                description = value
        elif _is_rule(node, 'background'):
            background = build_background(node)
        elif _is_rule(node, 'scenario'):
            scenarios.append(build_scenario(node))
        elif _is_rule(node, 'tags'):
            tags = parse_tags(node)

    if name is None or position is None:
        raise ConstructionError('feature is missing its keyword or name', _first_position(tree))

    logger.debug(f'built feature "{name}" with {len(scenarios)} scenarios')

    return Feature(
        name=name,
        scenarios=tuple(scenarios),
        position=position,
        description=description,
        background=background,
        tags=tags,
    )
