"""
Matching Module
Tokenization, scan value types and similarity scoring
"""

from .tokenizer import TokenSet, tokenize_filename, tokenize_text
from .models import (
    SourceDocument,
    DestinationProfile,
    NamingPattern,
    MatchCandidate,
    ScanResult,
)
from .scorer import ScoreBreakdown, jaccard_similarity, score, score_breakdown

__all__ = [
    'TokenSet',
    'tokenize_filename',
    'tokenize_text',
    'SourceDocument',
    'DestinationProfile',
    'NamingPattern',
    'MatchCandidate',
    'ScanResult',
    'ScoreBreakdown',
    'jaccard_similarity',
    'score',
    'score_breakdown',
]
