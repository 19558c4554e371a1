# src/commentsense/domain/lexicon.py
"""
Heuristic keyword tables used by the text classifiers.

Tables are module-level, read-only data: tuples of phrases wrapped in
MappingProxyType so nothing can mutate them after import. Each table pairs
an ordered phrase list with the weight a match contributes.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class WeightedTerms:
    """Ordered phrase list with the weight each present phrase adds"""

    name: str
    weight: float
    terms: Tuple[str, ...]

    def matches(self, lower_text: str) -> Tuple[str, ...]:
        """Terms contained in already lower-cased text, in table order"""
        return tuple(term for term in self.terms if term in lower_text)


@dataclass(frozen=True)
class CategoryTerms:
    """Keyword tiers of one content category"""

    primary: WeightedTerms
    secondary: WeightedTerms
    negative: WeightedTerms

    @property
    def tiers(self) -> Tuple[WeightedTerms, ...]:
        return (self.primary, self.secondary, self.negative)

    @property
    def topical_terms(self) -> Tuple[str, ...]:
        """Primary then secondary terms (used for keyword extraction)"""
        return self.primary.terms + self.secondary.terms


def _category(primary, secondary, negative) -> CategoryTerms:
    return CategoryTerms(
        primary=WeightedTerms("primary", 3, tuple(primary)),
        secondary=WeightedTerms("secondary", 2, tuple(secondary)),
        # Negative context still counts toward the category
        negative=WeightedTerms("negative", 1, tuple(negative)),
    )


# ============================================================================
# Categories (declaration order is the tie-break order)
# ============================================================================

GENERAL_CATEGORY = "general"
GENERAL_CONFIDENCE = 0.1

CATEGORY_KEYWORDS: Mapping[str, CategoryTerms] = MappingProxyType(
    {
        "skincare": _category(
            primary=[
                "skin", "skincare", "moisturizer", "cleanser", "serum", "cream",
                "lotion", "acne", "wrinkles", "aging", "hydration", "dry",
                "oily", "sensitive",
            ],
            secondary=[
                "routine", "glow", "texture", "pores", "blackheads", "breakout",
                "dermatologist", "ingredients", "retinol", "hyaluronic",
                "vitamin c", "spf",
            ],
            negative=[
                "irritation", "reaction", "burning", "stinging", "rash",
                "allergic",
            ],
        ),
        "fragrance": _category(
            primary=[
                "perfume", "fragrance", "scent", "cologne", "eau de toilette",
                "eau de parfum", "smell", "aroma", "notes", "spray",
            ],
            secondary=[
                "floral", "woody", "citrus", "musky", "vanilla", "rose",
                "jasmine", "sandalwood", "bergamot", "lasting", "projection",
                "sillage",
            ],
            negative=["overpowering", "synthetic", "cheap", "headache", "cloying"],
        ),
        "makeup": _category(
            primary=[
                "makeup", "cosmetics", "foundation", "concealer", "lipstick",
                "eyeshadow", "mascara", "blush", "bronzer", "highlighter",
            ],
            secondary=[
                "coverage", "pigmentation", "blend", "long-lasting",
                "waterproof", "matte", "shimmer", "palette", "brush",
                "application",
            ],
            negative=["patchy", "cakey", "streaky", "smudge", "flaky"],
        ),
        "haircare": _category(
            primary=[
                "hair", "shampoo", "conditioner", "styling", "treatment",
                "mask", "oil", "serum", "spray", "gel",
            ],
            secondary=[
                "volume", "shine", "frizz", "damage", "repair", "growth",
                "thickness", "curl", "straight", "color", "bleach", "dye",
            ],
            negative=["greasy", "dry", "brittle", "thinning", "loss", "damage"],
        ),
    }
)

INSIGHT_CATEGORIES: Tuple[str, ...] = tuple(CATEGORY_KEYWORDS) + (GENERAL_CATEGORY,)


# ============================================================================
# Sentiment tiers
# ============================================================================

POSITIVE_TIERS: Tuple[WeightedTerms, ...] = (
    WeightedTerms(
        "strong", 3,
        ("amazing", "incredible", "fantastic", "outstanding", "exceptional",
         "phenomenal", "brilliant", "perfect", "flawless"),
    ),
    WeightedTerms(
        "moderate", 2,
        ("good", "great", "nice", "love", "like", "enjoy", "happy", "satisfied",
         "pleased", "recommend"),
    ),
    WeightedTerms(
        "mild", 1,
        ("okay", "fine", "decent", "alright", "not bad", "works", "useful"),
    ),
)

NEGATIVE_TIERS: Tuple[WeightedTerms, ...] = (
    WeightedTerms(
        "strong", -3,
        ("terrible", "awful", "horrible", "disgusting", "worst", "hate",
         "despise", "useless", "trash", "garbage"),
    ),
    WeightedTerms(
        "moderate", -2,
        ("bad", "poor", "disappointing", "waste", "regret", "annoying",
         "frustrating", "overpriced"),
    ),
    WeightedTerms(
        "mild", -1,
        ("meh", "boring", "bland", "average", "nothing special",
         "could be better"),
    ),
)

SENTIMENT_TIERS: Tuple[WeightedTerms, ...] = POSITIVE_TIERS + NEGATIVE_TIERS


# ============================================================================
# Spam patterns (weight per matching phrase, reason tag = table name)
# ============================================================================

SPAM_PATTERNS: Tuple[WeightedTerms, ...] = (
    WeightedTerms(
        "promotional_content", 0.3,
        ("click here", "visit my", "check out my", "follow me", "subscribe",
         "link in bio", "dm me", "message me"),
    ),
    WeightedTerms(
        "monetary_scheme", 0.4,
        ("free money", "make money", "earn cash", "get paid", "winner", "prize",
         "lottery", "investment"),
    ),
    WeightedTerms(
        "repetitive_pattern", 0.2,
        ("first", "second", "third", "fourth", "fifth"),
    ),
    WeightedTerms(
        "suspicious_content", 0.5,
        ("bot", "fake", "scam", "virus", "hack", "phishing"),
    ),
)


# ============================================================================
# Quality indicators
# ============================================================================

QUALITY_INDICATORS = WeightedTerms(
    "quality_indicator", 0.1,
    ("detailed", "experience", "recommend", "tried", "used", "months", "weeks",
     "results", "improvement", "comparison"),
)


# ============================================================================
# Stop words (keyword extraction)
# ============================================================================

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
        "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "may", "might", "must", "can", "this", "that", "these", "those", "i",
        "you", "he", "she", "it", "we", "they", "me", "him", "her", "us",
        "them", "my", "your", "his", "its", "our", "their",
    }
)
