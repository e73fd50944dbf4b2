"""Performance scoring and plotting."""

from pid_academy.analyzer.scoring import PerformanceScorer, ScoreCard, grade_for

__all__ = [
    "PerformanceScorer",
    "ScoreCard",
    "grade_for",
]
