"""
Domain services for the business management system.
"""

from .billing_service import BillingService
from .numbering_service import NumberingService

__all__ = [
    "BillingService",
    "NumberingService",
]
