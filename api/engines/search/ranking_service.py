"""
Deterministic, explainable relevance scoring and ranking for search.

Each candidate's score is a plain weighted sum (no length normalization,
no term-frequency weighting):

    score = text(name,        5, 8)
          + text(slug,        4, 6)
          + text(category,    2, 3)
          + text(description, 1, 2)   # short description when description is empty
          + sum(text(tag, 2, 3) for tag in tags)
          + boost_bonus * (boost keywords contained in the name)

    text(field, contains, exact):
        + contains   if the field contains the full normalized query
        + contains   for every query token the field contains
        + exact      if the field equals the normalized query

A multi-word query is therefore credited once for the whole phrase and once
per token on the same field.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .schemas import CandidateRecord, ScoredCandidate, TermSet
from .vocabulary import DEFAULT_VOCABULARY, SearchVocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldWeight:
    contains: float
    exact: float


class RankingService:
    """Scores, sorts and paginates the candidate window."""

    WEIGHTS = {
        "name": FieldWeight(5, 8),
        "slug": FieldWeight(4, 6),
        "category": FieldWeight(2, 3),
        "description": FieldWeight(1, 2),
        "tag": FieldWeight(2, 3),
    }

    def __init__(self, vocabulary: SearchVocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary

    @staticmethod
    def score_text(
        text: Optional[str],
        normalized_query: str,
        tokens: Sequence[str],
        weight: FieldWeight,
    ) -> float:
        """Containment/exact-match contribution of one field"""
        if not text:
            return 0.0
        t = text.lower()
        score = 0.0
        if normalized_query in t:
            score += weight.contains
        for token in tokens:
            if token and token in t:
                score += weight.contains
        if t == normalized_query:
            score += weight.exact
        return score

    def score_candidate(self, candidate: CandidateRecord, term_set: TermSet) -> float:
        query = term_set.normalized_query
        tokens = term_set.tokens

        score = 0.0
        score += self.score_text(candidate.name, query, tokens, self.WEIGHTS["name"])
        score += self.score_text(candidate.slug, query, tokens, self.WEIGHTS["slug"])
        score += self.score_text(candidate.category_name, query, tokens, self.WEIGHTS["category"])
        score += self.score_text(
            candidate.description or candidate.short_description,
            query,
            tokens,
            self.WEIGHTS["description"],
        )
        # Sorted so the float sum is order-independent of set iteration
        for tag in sorted(candidate.tag_names):
            score += self.score_text(tag, query, tokens, self.WEIGHTS["tag"])

        name = (candidate.name or "").lower()
        for keyword in self.vocabulary.boost_keywords:
            if keyword in name:
                score += self.vocabulary.boost_bonus

        return score

    def rank(self, candidates: Sequence[CandidateRecord], term_set: TermSet) -> List[ScoredCandidate]:
        """
        Score and sort candidates by descending score.

        The sort is stable: equal scores keep the store's recency order.
        """
        scored = [ScoredCandidate(candidate=c, score=self.score_candidate(c, term_set)) for c in candidates]
        return sorted(scored, key=lambda s: s.score, reverse=True)

    @staticmethod
    def paginate(ranked: Sequence[ScoredCandidate], page: int, page_size: int) -> List[ScoredCandidate]:
        """
        Slice one page out of the ranked window.

        Pages past the end of the candidate window come back short or empty
        even when the total match count is larger.
        """
        start = (page - 1) * page_size
        return list(ranked[start:start + page_size])
