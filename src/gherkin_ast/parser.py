from __future__ import annotations

import logging

from lark import Tree, UnexpectedInput

from gherkin_ast.builder import build_feature
from gherkin_ast.errors import ConstructionError, ParseError, from_unexpected_input
from gherkin_ast.grammar import get_parser
from gherkin_ast.model import Feature


logger = logging.getLogger(__name__)


def parse(text: str) -> Feature:
    """Parse the text of a feature file.

    Raises a `ParseError` subclass, positioned in `text`, if the text is not a valid feature.
    """
    try:
        tree = get_parser().parse(text)
    except UnexpectedInput as e:
        error = from_unexpected_input(e, text)
        logger.debug(f'failed to parse feature: {error}')
        raise error from e

    feature = next((child for child in tree.children if isinstance(child, Tree) and child.data == 'feature'), None)

    if feature is None:
        raise ConstructionError('parse tree does not contain a feature', (0, 0))

    return build_feature(feature)


def parse_or_exit(text: str) -> Feature:
    """Same as `parse`, but exits the process if the feature could not be parsed."""
    try:
        return parse(text)
    except ParseError as e:
        logger.error(str(e))
        raise SystemExit(1) from e
