# src/commentsense/services/classifiers.py
"""
Text Classifiers
Heuristic scoring functions over lower-cased substring matches.

Every function is pure and deterministic: the same text (and metadata)
always yields the same verdict. Phrase tables live in domain.lexicon.
"""

import re
from collections import Counter
from typing import Dict, List

from commentsense.domain.lexicon import (
    CATEGORY_KEYWORDS,
    GENERAL_CATEGORY,
    GENERAL_CONFIDENCE,
    QUALITY_INDICATORS,
    SENTIMENT_TIERS,
    SPAM_PATTERNS,
    STOP_WORDS,
)
from commentsense.domain.models import (
    CategoryResult,
    EngagementLevel,
    QualityResult,
    Sentiment,
    SentimentResult,
    SpamResult,
)

# ============================================================================
# Thresholds
# ============================================================================

SENTIMENT_THRESHOLD = 0.5
SPAM_THRESHOLD = 0.5
QUALITY_THRESHOLD = 0.4

MAX_KEYWORDS = 8
MAX_FREQUENT_WORDS = 5

_EMOJI_PATTERN = re.compile(
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF\U0001F1E0-\U0001F1FF]"
)
_UPPERCASE_PATTERN = re.compile(r"[A-Z]")
_URL_PATTERN = re.compile(r"https?://|www\.")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_NON_LETTER = re.compile(r"[^a-z]")
_VOWEL_RUN = re.compile(r"[aeiouy]+")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _unique(items: List[str]) -> List[str]:
    """De-duplicate keeping first occurrence order"""
    return list(dict.fromkeys(items))


def count_sentences(text: str) -> int:
    """Non-blank pieces between runs of sentence punctuation"""
    return sum(1 for piece in _SENTENCE_SPLIT.split(text) if piece.strip())


# ============================================================================
# Sentiment
# ============================================================================


def analyze_sentiment(text: str) -> SentimentResult:
    """
    Score sentiment from weighted phrase tiers

    Each phrase present adds its tier weight once. The score is the mean
    weight of matched phrases, clamped to [-1, 1].
    """
    lower = (text or "").lower()
    total = 0.0
    matches = 0

    for tier in SENTIMENT_TIERS:
        found = tier.matches(lower)
        total += tier.weight * len(found)
        matches += len(found)

    normalized = total / matches if matches else 0.0

    if normalized > SENTIMENT_THRESHOLD:
        label = Sentiment.POSITIVE
    elif normalized < -SENTIMENT_THRESHOLD:
        label = Sentiment.NEGATIVE
    else:
        label = Sentiment.NEUTRAL

    return SentimentResult(label=label, score=_clamp(normalized, -1.0, 1.0))


# ============================================================================
# Category
# ============================================================================


def category_scores(text: str) -> Dict[str, int]:
    """Raw weighted score per category, in declaration order"""
    lower = (text or "").lower()
    return {
        name: sum(tier.weight * len(tier.matches(lower)) for tier in terms.tiers)
        for name, terms in CATEGORY_KEYWORDS.items()
    }


def categorize(text: str) -> CategoryResult:
    """
    Assign a content category

    The highest positive score wins; ties go to the earlier category.
    Confidence is the winning share of all category scores.
    """
    scores = category_scores(text)

    top_category = None
    top_score = 0
    for name, score in scores.items():
        if score > top_score:
            top_category, top_score = name, score

    if top_category is None:
        return CategoryResult(category=GENERAL_CATEGORY, confidence=GENERAL_CONFIDENCE)

    total = sum(scores.values())
    return CategoryResult(category=top_category, confidence=top_score / total)


# ============================================================================
# Spam
# ============================================================================


def detect_spam(text: str) -> SpamResult:
    """
    Score how spam-like a comment is

    Phrase tables add their weight per matching phrase; structural
    signals (short text, emoji floods, shouting, links) add fixed weights.
    """
    text = text or ""
    lower = text.lower()
    score = 0.0
    reasons: List[str] = []

    for pattern in SPAM_PATTERNS:
        for _ in pattern.matches(lower):
            score += pattern.weight
            reasons.append(pattern.name)

    length = len(text)
    if length < 10:
        score += 0.2
        reasons.append("too_short")

    if len(_EMOJI_PATTERN.findall(text)) > 5:
        score += 0.3
        reasons.append("excessive_emojis")

    caps_ratio = len(_UPPERCASE_PATTERN.findall(text)) / length if length else 0.0
    if caps_ratio > 0.7 and length > 10:
        score += 0.2
        reasons.append("excessive_caps")

    if _URL_PATTERN.search(text):
        score += 0.3
        reasons.append("contains_url")

    score = _clamp(score, 0.0, 1.0)
    return SpamResult(is_spam=score > SPAM_THRESHOLD, score=score, reasons=_unique(reasons))


# ============================================================================
# Quality
# ============================================================================


def assess_quality(text: str, like_count: int = 0) -> QualityResult:
    """Score comment quality from length, likes, indicators and structure"""
    text = text or ""
    score = 0.0
    factors: List[str] = []

    if len(text) > 50:
        score += 0.2
        factors.append("adequate_length")
    if len(text) > 100:
        score += 0.1
        factors.append("detailed_content")

    if like_count > 0:
        score += 0.3
        factors.append("has_engagement")
    if like_count > 5:
        score += 0.2
        factors.append("high_engagement")

    for _ in QUALITY_INDICATORS.matches(text.lower()):
        score += QUALITY_INDICATORS.weight
        factors.append(QUALITY_INDICATORS.name)

    if count_sentences(text) > 1:
        score += 0.1
        factors.append("multiple_sentences")

    # Empty text compares "" == "" and still earns the point
    if text[:1] == text[:1].upper():
        score += 0.05
        factors.append("proper_capitalization")

    score = _clamp(score, 0.0, 1.0)
    return QualityResult(
        is_quality=score > QUALITY_THRESHOLD, score=score, factors=_unique(factors)
    )


# ============================================================================
# Readability
# ============================================================================


def count_syllables(text: str) -> int:
    """
    Crude syllable estimate

    Letters only, each vowel run collapsed to one mark, a trailing mark
    dropped; the remaining length (minimum 1) is the estimate.
    """
    letters = _NON_LETTER.sub("", (text or "").lower())
    marked = _VOWEL_RUN.sub("a", letters)
    if marked.endswith("a"):
        marked = marked[:-1]
    return len(marked) or 1


def calculate_readability(text: str) -> float:
    """Simplified Flesch reading ease normalized to [0, 1]"""
    text = text or ""
    sentences = count_sentences(text)
    words = len(text.split())
    if sentences == 0 or words == 0:
        return 0.0

    syllables = count_syllables(text)
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    return _clamp(score, 0.0, 100.0) / 100


# ============================================================================
# Keywords & engagement
# ============================================================================


def extract_keywords(text: str, category: str) -> List[str]:
    """
    Extract up to eight keywords

    Category vocabulary found in the text comes first (table order), then
    up to five frequent or long tokens by descending frequency.
    """
    lower = (text or "").lower()
    tokens = [
        token
        for token in _NON_WORD.sub(" ", lower).split()
        if len(token) > 3 and token not in STOP_WORDS
    ]

    relevant: List[str] = []
    terms = CATEGORY_KEYWORDS.get(category)
    if terms is not None:
        relevant = _unique([term for term in terms.topical_terms if term in lower])

    counts = Counter(tokens)
    # Counter preserves first-seen order and sorted() is stable
    candidates = [
        (word, count) for word, count in counts.items() if count > 1 or len(word) > 5
    ]
    frequent = [
        word
        for word, _ in sorted(candidates, key=lambda item: item[1], reverse=True)[
            :MAX_FREQUENT_WORDS
        ]
    ]

    return (relevant + frequent)[:MAX_KEYWORDS]


def engagement_level(like_count: int) -> EngagementLevel:
    """Engagement tier from like count alone"""
    if like_count > 10:
        return EngagementLevel.HIGH
    if like_count > 2:
        return EngagementLevel.MEDIUM
    return EngagementLevel.LOW
