from typing import Dict, Tuple


FEATURE_KEYWORDS: Tuple[str, ...] = ('Feature',)
BACKGROUND_KEYWORDS: Tuple[str, ...] = ('Background',)
SCENARIO_KEYWORDS: Tuple[str, ...] = ('Scenario Outline', 'Scenario Template', 'Scenario', 'Example')
EXAMPLES_KEYWORDS: Tuple[str, ...] = ('Examples', 'Scenarios')

STEP_KEYWORDS_PRIMARY: Tuple[str, ...] = ('Given', 'When', 'Then')
STEP_KEYWORDS_CONTINUATION: Tuple[str, ...] = ('And', 'But')
STEP_KEYWORDS: Tuple[str, ...] = STEP_KEYWORDS_PRIMARY + STEP_KEYWORDS_CONTINUATION

MARKER_TAG = '@'
MARKER_COMMENT = '#'
MARKER_TABLE = '|'
MARKERS_DOCSTRING: Tuple[str, ...] = ('"""', '```')

# escape sequences allowed inside a table cell
TABLE_CELL_ESCAPES: Dict[str, str] = {
    '|': '|',
    '\\': '\\',
    'n': '\n',
}

DIAGNOSTIC_SOURCE = 'gherkin-ast'
FEATURE_FILE_GLOB = '**/*.feature'
