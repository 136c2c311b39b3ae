from importlib.metadata import version, PackageNotFoundError

from gherkin_ast.model import Background, Examples, Feature, Position, Scenario, Step, StepKind, Table
from gherkin_ast.errors import ConstructionError, ContextError, FeatureSyntaxError, ParseError
from gherkin_ast.parser import parse, parse_or_exit


try:
    __version__ = version('gherkin-ast')
except PackageNotFoundError:
    __version__ = 'unknown'


__all__ = [
    'Background',
    'ConstructionError',
    'ContextError',
    'Examples',
    'Feature',
    'FeatureSyntaxError',
    'ParseError',
    'Position',
    'Scenario',
    'Step',
    'StepKind',
    'Table',
    'parse',
    'parse_or_exit',
]
