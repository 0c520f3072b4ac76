"""
Utility modules for the premium API
"""
from .config_loader import MatrixConfig, PremiumConfig, QuoteConfig, StoreConfig, load_premium_config

__all__ = [
    'load_premium_config',
    'PremiumConfig',
    'StoreConfig',
    'MatrixConfig',
    'QuoteConfig',
]
