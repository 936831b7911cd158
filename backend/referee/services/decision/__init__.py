"""Decision engine — generic multi-criteria ranking with trade-off reporting.

Modules:
    config             Centralized thresholds (strong score, margins, confidence)
    models             Option / Constraints inputs and derived result records
    errors             InputError, ScorerUnavailable, ComputationInvariantError
    aggregator         Sums weighted criterion scores into a total
    constraint_filter  Hard pass/fail predicates (maxCost, requiredFeatures)
    recommender        Top valid option plus confidence from the score gap
    tradeoff_analyzer  Pairwise comparison for criteria each option wins
    summary_reporter   Top-N choices and per-criterion averages
    engine             Orchestrates scorer fan-out and the steps above

Pipeline:
    DomainScorer → Aggregator → ConstraintFilter
    → Recommender / TradeoffAnalyzer / SummaryReporter → ComparisonResult
"""
