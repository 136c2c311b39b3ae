from __future__ import annotations

import json
import logging

from typing import List, Optional
from argparse import Namespace as Arguments
from dataclasses import asdict
from pathlib import Path

from pygls.workspace import TextDocument
from lsprotocol.types import Diagnostic, DiagnosticSeverity
from colorama import init, Fore

from gherkin_ast.constants import FEATURE_FILE_GLOB
from gherkin_ast.diagnostics import to_diagnostic, validate_feature
from gherkin_ast.errors import ParseError
from gherkin_ast.parser import parse


logger = logging.getLogger(__name__)


def _get_severity_color(severity: Optional[DiagnosticSeverity]) -> str:
    if severity == DiagnosticSeverity.Error:
        return Fore.RED
    elif severity == DiagnosticSeverity.Information:
        return Fore.BLUE
    elif severity == DiagnosticSeverity.Warning:
        return Fore.YELLOW
    elif severity == DiagnosticSeverity.Hint:
        return Fore.CYAN

    return Fore.RESET


def diagnostic_to_text(filename: str, diagnostic: Diagnostic) -> str:
    color = _get_severity_color(diagnostic.severity)
    severity = diagnostic.severity.name if diagnostic.severity is not None else 'UNKNOWN'
    message = ': '.join(diagnostic.message.split('\n'))

    return '\t'.join(
        [
            f'{filename}:{diagnostic.range.start.line+1}:{diagnostic.range.start.character+1}',
            f'{color}{severity.lower()}{Fore.RESET}',
            message,
        ]
    )


def _display_name(file: Path) -> str:
    return file.as_posix().replace(Path.cwd().as_posix(), '').lstrip('/\\')


def find_feature_files(arguments: List[str]) -> List[Path]:
    files: List[Path]

    if arguments == ['.']:
        files = sorted(Path.cwd().glob(FEATURE_FILE_GLOB))
    else:
        files = []
        paths = [Path(argument) for argument in arguments]

        for path in paths:
            if path.is_dir():
                files.extend(sorted(path.glob(FEATURE_FILE_GLOB)))
            else:
                files.append(path)

    return files


def lint(args: Arguments) -> int:
    # init colorama for ansi colors
    init()

    files = find_feature_files(args.files)
    logger.debug(f'linting {len(files)} feature files')

    rc: int = 0
    for file in files:
        text_document = TextDocument(file.resolve().as_uri())
        diagnostics = validate_feature(text_document)

        if len(diagnostics) < 1:
            continue

        rc = 1

        filename = _display_name(file)

        for diagnostic in diagnostics:
            print(diagnostic_to_text(filename, diagnostic))

    return rc


def dump(args: Arguments) -> int:
    init()

    file = Path(args.file)
    text_document = TextDocument(file.resolve().as_uri())
    source = text_document.source

    try:
        feature = parse(source)
    except ParseError as e:
        print(diagnostic_to_text(_display_name(file), to_diagnostic(e, source.split('\n'))))
        return 1

    print(json.dumps(asdict(feature), indent=args.indent))

    return 0
