"""Read-side summaries."""

from buildledger.queries.summaries import calculate_financial_summary, filter_by_period

__all__ = ["calculate_financial_summary", "filter_by_period"]
