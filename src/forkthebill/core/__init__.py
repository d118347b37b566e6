"""
Core Utilities Package

Shared primitives used by the expense domain and the CLI.

This package provides:
- Currency handling with integer cents for precision
- Exact rational allocation of tax and tip with round-half-even output
- Configuration management for environment-specific settings
- Pretty-printed, atomically written JSON files
"""

from .allocation import (
    SHARE_EPSILON,
    allocate_proportionally,
    exceeds_whole,
    is_valid_share,
    prorate,
    round_cents,
    share_of,
    to_share,
)
from .config import (
    Config,
    Environment,
    StoreBackend,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import MAX_CENTS, cents_to_dollars_str, format_cents, parse_dollars_to_cents
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "StoreBackend",
    "get_config",
    "get_data_dir",
    "is_development",
    "is_production",
    "is_test",
    "reload_config",
    # Money and currency
    "Money",
    "MAX_CENTS",
    "cents_to_dollars_str",
    "format_cents",
    "parse_dollars_to_cents",
    # Allocation
    "SHARE_EPSILON",
    "allocate_proportionally",
    "exceeds_whole",
    "is_valid_share",
    "prorate",
    "round_cents",
    "share_of",
    "to_share",
]
