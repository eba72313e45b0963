"""
Electricity Subsidy Calculator - Source Package

Computes the monthly electricity subsidy a household is entitled to,
decides solar-program eligibility, and keeps a bounded local history
of past calculations for statistics and trends.

DESIGN PRINCIPLES:
1. The formula is pure and deterministic
2. Stored results are always re-derivable from their inputs
3. Persistence sits behind a swappable key-value interface
4. Every significant step is logged
"""

__version__ = "1.0.0"
__author__ = "Electricity Subsidy Team"
