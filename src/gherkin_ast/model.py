from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass, field


# (line, column), both starting at 1
Position = Tuple[int, int]


class StepKind(str, Enum):
    """The step type after `And` and `But` has been resolved in context."""

    GIVEN = 'Given'
    WHEN = 'When'
    THEN = 'Then'


@dataclass(frozen=True)
class Table:
    header: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    position: Position

    def __post_init__(self) -> None:
        width = len(self.header)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f'row {index} has {len(row)} cells, header has {width}')


@dataclass(frozen=True)
class Step:
    """A single scenario step.

    `keyword` is the keyword as written in the feature file, including `And` and `But`,
    while `kind` is what that keyword means in the context of the preceding steps.
    """

    kind: StepKind
    keyword: str
    text: str
    position: Position
    docstring: Optional[str] = field(default=None)
    table: Optional[Table] = field(default=None)

    def __post_init__(self) -> None:
        if self.docstring is not None and self.table is not None:
            raise ValueError('a step can have either a docstring or a table, not both')

    def __str__(self) -> str:
        return f'{self.keyword} {self.text}'


@dataclass(frozen=True)
class Examples:
    table: Table
    position: Position
    tags: Optional[Tuple[str, ...]] = field(default=None)


@dataclass(frozen=True)
class Scenario:
    name: str
    steps: Tuple[Step, ...]
    position: Position
    examples: Optional[Examples] = field(default=None)
    tags: Optional[Tuple[str, ...]] = field(default=None)


@dataclass(frozen=True)
class Background:
    steps: Tuple[Step, ...]
    position: Position


@dataclass(frozen=True)
class Feature:
    name: str
    scenarios: Tuple[Scenario, ...]
    position: Position
    description: Optional[str] = field(default=None)
    background: Optional[Background] = field(default=None)
    tags: Optional[Tuple[str, ...]] = field(default=None)
