"""Data Alchemist analysis: rule recommendations and keyword-based language features."""

from dataalchemist.analysis.natural_language import parse_rule_text
from dataalchemist.analysis.query import QueryResult, run_query
from dataalchemist.analysis.recommendations import (
    GroupWorkload,
    PhaseLoad,
    analyze_co_run_patterns,
    analyze_phase_conflicts,
    analyze_skill_coverage,
    analyze_workload_distribution,
    compute_phase_loads,
    mine_recommendations,
)

__all__ = [
    "GroupWorkload",
    "PhaseLoad",
    "QueryResult",
    "analyze_co_run_patterns",
    "analyze_phase_conflicts",
    "analyze_skill_coverage",
    "analyze_workload_distribution",
    "compute_phase_loads",
    "mine_recommendations",
    "parse_rule_text",
    "run_query",
]
