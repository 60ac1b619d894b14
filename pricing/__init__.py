"""
MARKETPLACE PRICING ENGINE
Forward and reverse fee calculations for Nuvemshop, Shopee and Elo7
"""

from .models import CalculationInput, CalculationResult, Channel, Direction, FeeConfig, FeeSchedule
from .processor import FeeEngine, compute_for_all_channels, lookup_bracketed_service_fee

__all__ = [
    'FeeEngine',
    'FeeConfig',
    'FeeSchedule',
    'Channel',
    'Direction',
    'CalculationInput',
    'CalculationResult',
    'compute_for_all_channels',
    'lookup_bracketed_service_fee',
]
