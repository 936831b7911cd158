"""Decision engine configuration — single source for all thresholds."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RankingThresholds:
    """Recommendation and reporting thresholds (0-10 raw scale)."""
    strong_score: float = 7.0        # raw >= this is cited in the reason
    fallback_alternatives: int = 2   # shown when nothing meets constraints
    runner_up_alternatives: int = 2  # shown next to a winner
    top_choices: int = 3             # summary top-N


@dataclass(frozen=True)
class ConfidenceParams:
    """confidence = min(floor + gap / spread, ceiling)."""
    floor: float = 0.5
    ceiling: float = 1.0
    spread: float = 10.0   # a 5-point gap saturates at 1.0


@dataclass(frozen=True)
class TradeoffParams:
    """When a criterion counts as a differentiator between two options."""
    min_margin: float = 1.0   # |raw(A) - raw(B)| must exceed this


@dataclass(frozen=True)
class ReportThresholds:
    """Per-domain report notes (pros, cons, best-for scenarios)."""
    strong_score: float = 7.0     # raw >= this is listed as a pro
    weak_score: float = 5.0       # raw <= this is listed as a con
    standout_score: float = 8.0   # raw >= this qualifies a best-for scenario
    portable_score: float = 6.0   # vendor_lock_in raw >= this counts as easy to migrate to
    high_monthly_cost: float = 150.0


@dataclass(frozen=True)
class DecisionConfig:
    """Top-level config aggregating all sub-configs."""
    ranking: RankingThresholds = field(default_factory=RankingThresholds)
    confidence: ConfidenceParams = field(default_factory=ConfidenceParams)
    tradeoffs: TradeoffParams = field(default_factory=TradeoffParams)
    reports: ReportThresholds = field(default_factory=ReportThresholds)
    min_options: int = 2
    min_raw: float = 0.0
    max_raw: float = 10.0


# Shared instance
decision_config = DecisionConfig()
