"""
Built-in product-management process catalog.

Importing this package registers every process with the default registry.
"""

from . import (
    customer_advisory_board,
    jtbd_analysis,
    competitive_analysis,
    stakeholder_alignment,
    metrics_dashboard,
    product_launch_gtm,
)

__all__ = [
    "customer_advisory_board",
    "jtbd_analysis",
    "competitive_analysis",
    "stakeholder_alignment",
    "metrics_dashboard",
    "product_launch_gtm",
]
