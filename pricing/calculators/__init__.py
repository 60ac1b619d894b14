"""
Calculators Package

Provides one calculator per channel fee model.
"""

from .bracketed import BracketedServiceFeeCalculator, lookup_service_fee
from .capped import CappedCommissionCalculator
from .flat_rate import FlatRateCalculator

__all__ = [
    "FlatRateCalculator",
    "CappedCommissionCalculator",
    "BracketedServiceFeeCalculator",
    "lookup_service_fee",
]
