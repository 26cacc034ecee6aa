"""
O'Level grading table and aggregator.

The aggregate is always the sum of a candidate's best five subject marks,
and the percentage is taken against five times the table's highest mark,
so editing the grading table keeps both numbers consistent.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .exceptions import InvalidGradingTableError, UnknownGradeError

BEST_SUBJECT_COUNT = 5

# Standard WAEC/NECO nine-point scale used to seed new installations.
STANDARD_GRADES = {
    "A1": 9,
    "B2": 8,
    "B3": 7,
    "C4": 6,
    "C5": 5,
    "C6": 4,
    "D7": 3,
    "E8": 2,
    "F9": 1,
}


def round_percentage(part: int, whole: int) -> int:
    """round(part / whole * 100) with halves rounded up. `whole` must be positive."""
    return (200 * part + whole) // (2 * whole)


@dataclass(frozen=True)
class SubjectGrade:
    subject: str
    grade: str


@dataclass(frozen=True)
class OLevelScore:
    aggregate: int
    percentage: int


class GradingTable:
    """Grade label -> integer marks."""

    def __init__(self, marks_by_grade: Mapping[str, int]):
        if not marks_by_grade:
            raise InvalidGradingTableError("Grading table has no rules")
        table = {}
        for grade, marks in marks_by_grade.items():
            label = normalize_grade(grade)
            if label in table:
                raise InvalidGradingTableError(f"Duplicate grading rule for '{label}'")
            if marks < 0:
                raise InvalidGradingTableError(f"Grade '{label}' has negative marks ({marks})")
            table[label] = int(marks)
        if max(table.values()) == 0:
            raise InvalidGradingTableError("Grading table awards no marks for any grade")
        self._marks = table

    @classmethod
    def standard(cls) -> "GradingTable":
        return cls(STANDARD_GRADES)

    def __contains__(self, grade) -> bool:
        return normalize_grade(grade) in self._marks

    @property
    def max_marks(self) -> int:
        return max(self._marks.values())

    @property
    def max_possible(self) -> int:
        return BEST_SUBJECT_COUNT * self.max_marks

    def marks_for(self, grade: str, subject: Optional[str] = None) -> int:
        try:
            return self._marks[normalize_grade(grade)]
        except KeyError:
            raise UnknownGradeError(grade, subject) from None


def normalize_grade(grade) -> str:
    return str(grade).strip().upper()


def best_subject_marks(results: Iterable[SubjectGrade], table: GradingTable):
    """Marks of the candidate's best five subjects, highest first."""
    marks = [table.marks_for(r.grade, r.subject) for r in results]
    marks.sort(reverse=True)
    return marks[:BEST_SUBJECT_COUNT]


def aggregate_olevel(results: Iterable[SubjectGrade], table: GradingTable) -> OLevelScore:
    """
    Reduce a candidate's O'Level results to an aggregate and a percentage.

    Every grade is looked up before anything is summed, so a single unknown
    grade aborts the whole aggregation with UnknownGradeError instead of
    counting as zero.
    """
    aggregate = sum(best_subject_marks(results, table))
    return OLevelScore(
        aggregate=aggregate,
        percentage=round_percentage(aggregate, table.max_possible),
    )
