"""
Revenue Tracker.

Tracks a small set of clients and derives monthly revenue figures.
"""

__version__ = "0.1.0"

from revenue_tracker.config.logging_setup import use_stdlib_logging

use_stdlib_logging()
