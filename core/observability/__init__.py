"""
Observability Module for the Farm Management backend

Provides:
- Structured logging with correlation IDs (table, record, operation, page)
"""

from core.observability.logging import (
    get_logger,
    configure_logging,
    CorrelationContext,
    with_correlation,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "CorrelationContext",
    "with_correlation",
]
