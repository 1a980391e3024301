"""
Grade vocabularies and difficulty ranks.

Two closed vocabularies are modeled as a tagged union: ``VScaleGrade`` for
bouldering and ``YdsGrade`` for roped disciplines. Ranks are only ever
compared within a single vocabulary.

The YDS letter mapping (5.10a -> 10.00, 5.10b -> 10.25, ...) is an
approximation that makes averaging possible. It is not an official
grade-equivalence claim.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .constants import (
    V_SCALE_MAX,
    V_SCALE_MIN,
    YDS_LETTER_STEP,
    YDS_LETTERED_MAX,
    YDS_LETTERED_MIN,
    YDS_LETTERS,
    YDS_UNLETTERED,
)
from .errors import InvalidDisciplineError, InvalidGradeError


class Scale(str, Enum):
    V_SCALE = "V_SCALE"
    YDS = "YDS"


class Discipline(str, Enum):
    BOULDER = "BOULDER"
    LEAD = "LEAD"
    TOPROPE = "TOPROPE"

    @property
    def scale(self) -> Scale:
        """The grade vocabulary this discipline is graded in."""
        if self is Discipline.BOULDER:
            return Scale.V_SCALE
        return Scale.YDS


def coerce_discipline(value: "Discipline | str") -> Discipline:
    """Return ``value`` as a Discipline, raising InvalidDisciplineError otherwise."""
    if isinstance(value, Discipline):
        return value
    try:
        return Discipline(value)
    except ValueError as e:
        raise InvalidDisciplineError(value) from e


@dataclass(frozen=True)
class VScaleGrade:
    """A bouldering grade, V0 through V17."""

    number: int

    scale = Scale.V_SCALE

    @property
    def label(self) -> str:
        return f"V{self.number}"

    @property
    def rank(self) -> float:
        return float(self.number)


@dataclass(frozen=True)
class YdsGrade:
    """
    A Yosemite Decimal System grade.

    Attributes:
        number: The integer part after "5." (6 through 15).
        letter: Suffix a-d for 5.10 and harder, None for 5.6-5.9.
    """

    number: int
    letter: str | None = None

    scale = Scale.YDS

    @property
    def label(self) -> str:
        return f"5.{self.number}{self.letter or ''}"

    @property
    def rank(self) -> float:
        if self.letter is None:
            return float(self.number)
        return self.number + YDS_LETTERS.index(self.letter) * YDS_LETTER_STEP


Grade = VScaleGrade | YdsGrade


def _build_v_scale() -> tuple[VScaleGrade, ...]:
    return tuple(VScaleGrade(n) for n in range(V_SCALE_MIN, V_SCALE_MAX + 1))


def _build_yds() -> tuple[YdsGrade, ...]:
    grades = [YdsGrade(n) for n in YDS_UNLETTERED]
    for n in range(YDS_LETTERED_MIN, YDS_LETTERED_MAX + 1):
        grades.extend(YdsGrade(n, letter) for letter in YDS_LETTERS)
    return tuple(grades)


class GradeScale:
    """
    Rank lookup and total ordering for grade labels, scoped per discipline.

    Stateless apart from the fixed vocabulary tables, so a single instance
    can be shared freely.
    """

    VOCABULARIES: dict[Scale, tuple[Grade, ...]] = {
        Scale.V_SCALE: _build_v_scale(),
        Scale.YDS: _build_yds(),
    }

    _BY_LABEL: dict[Scale, dict[str, Grade]] = {
        scale: {g.label: g for g in grades} for scale, grades in VOCABULARIES.items()
    }

    def grades_for(self, discipline: Discipline | str) -> list[str]:
        """Ordered labels (easiest first) a discipline may be logged with."""
        scale = coerce_discipline(discipline).scale
        return [g.label for g in self.VOCABULARIES[scale]]

    def parse(self, discipline: Discipline | str, grade: "str | Grade") -> Grade:
        """Resolve a label to its typed grade within the discipline's vocabulary."""
        discipline = coerce_discipline(discipline)
        table = self._BY_LABEL[discipline.scale]

        if isinstance(grade, (VScaleGrade, YdsGrade)):
            if grade.scale is not discipline.scale or grade.label not in table:
                raise InvalidGradeError(discipline, grade.label)
            return grade

        if not isinstance(grade, str) or grade not in table:
            raise InvalidGradeError(discipline, grade)
        return table[grade]

    def rank_of(self, discipline: Discipline | str, grade: "str | Grade") -> float:
        return self.parse(discipline, grade).rank

    def compare(
        self, discipline: Discipline | str, grade_a: "str | Grade", grade_b: "str | Grade"
    ) -> int:
        """Return -1, 0 or 1 as ``grade_a`` is easier than, equal to or harder than ``grade_b``."""
        rank_a = self.rank_of(discipline, grade_a)
        rank_b = self.rank_of(discipline, grade_b)
        return (rank_a > rank_b) - (rank_a < rank_b)

    def max_grade(self, discipline: Discipline | str, grades: Sequence[str]) -> str:
        """
        Return the hardest label in ``grades``.

        Ties keep the first occurrence in input order.

        Raises:
            ValueError: If ``grades`` is empty.
            InvalidGradeError: If any label is outside the discipline's vocabulary.
        """
        if not grades:
            raise ValueError("max_grade requires at least one grade")

        best = grades[0]
        best_rank = self.rank_of(discipline, best)
        for grade in grades[1:]:
            rank = self.rank_of(discipline, grade)
            if rank > best_rank:
                best, best_rank = grade, rank
        return best

    def is_valid_pair(self, discipline: object, grade: object) -> bool:
        """Membership test that never raises."""
        try:
            self.parse(discipline, grade)  # type: ignore[arg-type]
        except (InvalidGradeError, InvalidDisciplineError):
            return False
        return True
