"""Base class for domain services."""

from typing import Any, ClassVar

import logfire


class Service:
    """Base class for all domain services.

    Spans opened through span() are named ``<span_prefix>.<operation>``,
    so traces of one service group together.
    """

    span_prefix: ClassVar[str] = "service"

    def span(self, operation: str, **attributes: Any):
        """Open a logfire span for one service operation."""
        return logfire.span(f"{self.span_prefix}.{operation}", **attributes)
