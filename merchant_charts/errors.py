from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when chart input cannot be coerced into numeric series data."""
