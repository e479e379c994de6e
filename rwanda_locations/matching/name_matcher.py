"""
Fuzzy name suggestions for location lookups.

This module provides the NameMatcher class, which proposes the closest known
names at a given administrative level when a lookup by name finds nothing
(for example a misspelt village typed into an address form).
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from rapidfuzz import fuzz, process, utils

from ..exceptions import ValidationError
from ..hierarchy import LEVEL_NAMES
from ..utils.data_utils import is_null_or_empty


class NameMatcher:
    """
    Ranks known names by similarity using rapidfuzz's WRatio scorer.

    Names are compared after rapidfuzz's default processing (lowercase,
    non-alphanumerics stripped), so suggestions are case-insensitive.
    """

    def __init__(self, names_by_level: Dict[str, Iterable[str]],
                 max_suggestions: int = 5, min_score: float = 70,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the NameMatcher.

        Args:
            names_by_level: Names known at each level; duplicates are collapsed
            max_suggestions: Default number of suggestions returned
            min_score: Default minimum similarity score (0-100)
            logger: Optional logger instance
        """
        if not 0 <= min_score <= 100:
            raise ValueError("min_score must be between 0 and 100")

        self.logger = logger or logging.getLogger(__name__)
        self.max_suggestions = max_suggestions
        self.min_score = min_score
        self._choices: Dict[str, List[str]] = {
            level: sorted(set(names)) for level, names in names_by_level.items()
        }

    def suggest(self, name: str, level: str = "village", limit: Optional[int] = None,
                score_cutoff: Optional[float] = None) -> List[Tuple[str, float]]:
        """
        Suggest known names at a level that resemble the given name.

        Args:
            name: Name to look up
            level: One of province, district, sector, cell, village
            limit: Maximum number of suggestions (default: max_suggestions)
            score_cutoff: Minimum score (default: min_score)

        Returns:
            (name, score) pairs, best match first
        """
        if level not in LEVEL_NAMES:
            raise ValidationError(
                f"Unknown hierarchy level: {level}",
                field_name="level",
                invalid_value=level,
                validation_rules=[f"one of: {', '.join(LEVEL_NAMES)}"]
            )

        choices = self._choices.get(level, [])
        if is_null_or_empty(name) or not choices:
            return []

        matches = process.extract(
            name,
            choices,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            limit=limit if limit is not None else self.max_suggestions,
            score_cutoff=score_cutoff if score_cutoff is not None else self.min_score
        )

        suggestions = [(match, round(score, 1)) for match, score, _ in matches]
        self.logger.debug(f"Suggestions for {level} '{name}': {suggestions}")
        return suggestions
