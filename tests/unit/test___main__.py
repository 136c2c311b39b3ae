import sys
import logging

from argparse import Namespace

import pytest

from _pytest.capture import CaptureFixture
from pytest_mock import MockerFixture

from gherkin_ast.__main__ import parse_arguments, setup_logging, main


def test_parse_arguments(capsys: CaptureFixture[str]) -> None:
    sys.argv = ['gherkin-ast', 'lint', '.']

    args = parse_arguments()

    assert args == Namespace(
        verbose=False,
        no_verbose=None,
        version=False,
        command='lint',
        files=['.'],
    )

    sys.argv = [
        'gherkin-ast',
        '--no-verbose',
        'gherkin_ast.parser',
        'lark',
        '--verbose',
        'lint',
        'a.feature',
        'features/',
    ]

    args = parse_arguments()

    assert args == Namespace(
        verbose=True,
        no_verbose=['gherkin_ast.parser', 'lark'],
        version=False,
        command='lint',
        files=['a.feature', 'features/'],
    )

    sys.argv = ['gherkin-ast', 'dump', 'a.feature']

    args = parse_arguments()

    assert args == Namespace(
        verbose=False,
        no_verbose=None,
        version=False,
        command='dump',
        file='a.feature',
        indent=2,
    )

    sys.argv = ['gherkin-ast', 'dump', 'a.feature', '--indent', '4']

    assert parse_arguments().indent == 4

    sys.argv = ['gherkin-ast', '--version']

    with pytest.raises(SystemExit) as se:
        parse_arguments()
    assert se.value.code == 0

    capture = capsys.readouterr()

    assert capture.out == ''
    assert not capture.err == ''

    sys.argv = ['gherkin-ast']

    with pytest.raises(SystemExit) as se:
        parse_arguments()
    assert se.value.code == 2

    sys.argv = ['gherkin-ast', 'lint']

    with pytest.raises(SystemExit) as se:
        parse_arguments()
    assert se.value.code == 2


def test_setup_logging(mocker: MockerFixture, capsys: CaptureFixture[str]) -> None:
    logging_basicConfig_mock = mocker.patch('gherkin_ast.__main__.logging.basicConfig')
    logging_StreamHandler_mock = mocker.patch('gherkin_ast.__main__.logging.StreamHandler', spec_set=logging.StreamHandler)

    # <no args>
    arguments = Namespace(verbose=False, no_verbose=None)

    setup_logging(arguments)

    assert logging_basicConfig_mock.call_count == 1
    _, kwargs = logging_basicConfig_mock.call_args_list[-1]
    assert kwargs.get('level', None) == logging.INFO
    assert kwargs.get('format', None) == '[%(asctime)s] %(levelname)s: %(message)s'
    handlers = kwargs.get('handlers', None)
    assert len(handlers) == 1
    assert logging_StreamHandler_mock.call_count == 1
    assert logging.getLogger('lark').level == logging.ERROR
    capture = capsys.readouterr()
    assert capture.err == ''
    assert capture.out == ''

    # --verbose --no-verbose gherkin_ast.parser foobar
    logging.getLogger('gherkin_ast.parser').setLevel(logging.NOTSET)
    arguments = Namespace(verbose=True, no_verbose=['gherkin_ast.parser', 'foobar'])

    setup_logging(arguments)

    assert logging_basicConfig_mock.call_count == 2
    _, kwargs = logging_basicConfig_mock.call_args_list[-1]
    assert kwargs.get('level', None) == logging.DEBUG
    assert logging.getLogger('gherkin_ast.parser').level == logging.ERROR
    capture = capsys.readouterr()
    assert capture.err == '!! logger "foobar" does not exist\n'
    assert capture.out == ''

    logging.getLogger('gherkin_ast.parser').setLevel(logging.NOTSET)


def test_main(mocker: MockerFixture) -> None:
    parse_arguments_mock = mocker.patch('gherkin_ast.__main__.parse_arguments')
    setup_logging_mock = mocker.patch('gherkin_ast.__main__.setup_logging', return_value=None)
    lint_mock = mocker.patch('gherkin_ast.cli.lint', return_value=1)
    dump_mock = mocker.patch('gherkin_ast.cli.dump', return_value=0)

    parse_arguments_mock.return_value = Namespace(verbose=False, no_verbose=None, version=False, command='lint', files=['.'])

    assert main() == 1
    assert setup_logging_mock.call_count == 1
    assert lint_mock.call_count == 1
    assert dump_mock.call_count == 0
    args, _ = lint_mock.call_args_list[-1]
    assert args[0].files == ['.']

    parse_arguments_mock.return_value = Namespace(verbose=False, no_verbose=None, version=False, command='dump', file='a.feature', indent=2)

    assert main() == 0
    assert setup_logging_mock.call_count == 2
    assert lint_mock.call_count == 1
    assert dump_mock.call_count == 1
