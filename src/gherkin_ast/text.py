from typing import List


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def is_blank(line: str) -> bool:
    return line.strip() == ''


def dedent(text: str) -> str:
    """Remove the whitespace prefix that all non-blank lines have in common.

    Lines that do not start with the common prefix, and lines that only contains
    whitespace, are emptied. A trailing newline in `text` is kept.
    """
    lines: List[str] = text.split('\n')
    if text.endswith('\n'):
        lines.pop()

    non_blank_lines = [line for line in lines if not is_blank(line)]

    if len(non_blank_lines) < 1:
        prefix = ''
    else:
        prefix = leading_whitespace(non_blank_lines[0])

    for line in non_blank_lines[1:]:
        length = 0
        for a, b in zip(prefix, line):
            if a != b:
                break
            length += 1

        prefix = prefix[:length]

    buffer: List[str] = []
    for line in lines:
        if line.startswith(prefix) and not is_blank(line):
            buffer.append(line[len(prefix) :])
        else:
            buffer.append('')

    result = '\n'.join(buffer)

    if text.endswith('\n'):
        result += '\n'

    return result
