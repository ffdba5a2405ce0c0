"""Encounter history aggregation."""
from .aggregator import EncounterAggregator
from .stats import build_summary, cohort_stats, win_rate, round_half_up

__all__ = [
    'EncounterAggregator',
    'build_summary',
    'cohort_stats',
    'win_rate',
    'round_half_up',
]
