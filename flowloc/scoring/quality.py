"""
Heuristic quality scoring for translated strings.

Scores are advisory: they are attached to results and averaged per job,
but never decide whether a translation is used.
"""

from __future__ import annotations
import math
import re
from typing import Iterable, Optional

BRACKET_PATTERN = re.compile(r"[{}()<>\[\]]")


class QualityScorer:
    """Cheap, explainable confidence score in [0, 100] for one translation."""

    BASE_SCORE = 70
    LENGTH_RATIO_BONUS = 10
    STRUCTURE_BONUS = 10
    NODE_NAME_BONUS = 5
    MAX_SCORE = 100

    MIN_LENGTH_RATIO = 0.5
    MAX_LENGTH_RATIO = 2.0

    def score(
        self,
        original: str,
        translated: Optional[str],
        context: Optional[str] = None,
        field_type: Optional[str] = None
    ) -> int:
        """
        Score one (original, translated) pair.

        Args:
            original: Source string
            translated: Translation, or None if it failed
            context: Where the string lives (workflow/node/parameter/settings)
            field_type: Field name that held the string

        Returns:
            Integer score between 0 and 100
        """
        if not translated:
            return 0

        score = self.BASE_SCORE

        # Neither truncated nor blown up
        if original:
            ratio = len(translated) / len(original)
            if self.MIN_LENGTH_RATIO < ratio < self.MAX_LENGTH_RATIO:
                score += self.LENGTH_RATIO_BONUS

        # Placeholders and expressions kept (count only, not position)
        original_brackets = len(BRACKET_PATTERN.findall(original or ""))
        if original_brackets:
            if len(BRACKET_PATTERN.findall(translated)) == original_brackets:
                score += self.STRUCTURE_BONUS

        if context == "node" and field_type == "name":
            score += self.NODE_NAME_BONUS

        return min(self.MAX_SCORE, score)

    @staticmethod
    def average_score(scores: Iterable[float]) -> int:
        """Arithmetic mean rounded half up; 0 for no scores."""
        values = list(scores)
        if not values:
            return 0
        return int(math.floor(sum(values) / len(values) + 0.5))


_default_scorer = QualityScorer()


def score(
    original: str,
    translated: Optional[str],
    context: Optional[str] = None,
    field_type: Optional[str] = None
) -> int:
    """Score with the default scorer."""
    return _default_scorer.score(original, translated, context, field_type)


def average_score(scores: Iterable[float]) -> int:
    return QualityScorer.average_score(scores)
