"""
Similarity scoring between a source document and a destination profile
"""

from dataclasses import dataclass
from typing import AbstractSet

from .models import DestinationProfile, SourceDocument
from .tokenizer import tokenize_filename

EXTENSION_BONUS = 0.2
ANCHOR_BONUS = 0.1


@dataclass(frozen=True)
class ScoreBreakdown:
    jaccard: float
    extension_bonus: float
    anchor_bonus: float

    @property
    def total(self) -> float:
        return self.jaccard + self.extension_bonus + self.anchor_bonus


def jaccard_similarity(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def score_breakdown(source: SourceDocument, profile: DestinationProfile) -> ScoreBreakdown:
    # Anchor only looks at the immediate folder name, not its parents
    folder_tokens = tokenize_filename(profile.folder_name)
    return ScoreBreakdown(
        jaccard=jaccard_similarity(source.tokens, profile.tokens),
        extension_bonus=EXTENSION_BONUS if source.extension in profile.extensions else 0.0,
        anchor_bonus=ANCHOR_BONUS if source.tokens & folder_tokens else 0.0,
    )


def score(source: SourceDocument, profile: DestinationProfile) -> float:
    """
    Relative match confidence, roughly in [0, 1.3]

    Content overlap (Jaccard) plus a flat bonus when the extension was seen
    in the folder and another when the folder's own name appears among the
    source tokens. Not a probability.
    """
    return score_breakdown(source, profile).total
