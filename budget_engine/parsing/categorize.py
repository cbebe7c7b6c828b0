"""Keyword-weight category classifier.

Every keyword found as a substring of the lower-cased text adds its own
length to its category's score, so specific phrases ("whole foods")
outweigh short generic ones ("food"). The highest score wins; ties go to
the category listed first in the taxonomy.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, NamedTuple, Optional, Tuple

from ..models import MAX_CONFIDENCE
from ..taxonomy import CATEGORY_KEYWORDS, OTHER_CATEGORY

logger = logging.getLogger(__name__)

CONFIDENCE_PER_POINT = 10


class CategoryMatch(NamedTuple):
    category: str
    confidence: int
    scores: Dict[str, int]


def keyword_scores(text: str, keywords: Optional[Mapping[str, Tuple[str, ...]]] = None) -> Dict[str, int]:
    """Score each category by the summed length of its keywords found in ``text``.

    Only categories with a non-zero score are returned, in taxonomy order.
    """
    table = CATEGORY_KEYWORDS if keywords is None else keywords
    lower = (text or '').lower()
    scores: Dict[str, int] = {}
    for category, words in table.items():
        score = sum(len(word) for word in words if word in lower)
        if score:
            scores[category] = score
    return scores


def classify(text: str, keywords: Optional[Mapping[str, Tuple[str, ...]]] = None) -> CategoryMatch:
    """Pick the best-scoring category for ``text``.

    Example:
        >>> classify("Starbucks coffee").category
        'Food & Dining'
        >>> classify("nothing to see").confidence
        0
    """
    scores = keyword_scores(text, keywords)

    best_category = OTHER_CATEGORY
    best_score = 0
    for category, score in scores.items():
        if score > best_score:
            best_category = category
            best_score = score

    confidence = min(best_score * CONFIDENCE_PER_POINT, MAX_CONFIDENCE)
    logger.debug("Classified %r as %s (scores=%s)", text, best_category, scores)
    return CategoryMatch(best_category, confidence, scores)
