"""
Folio App - Investment Dashboard Analytics Core

Side-effect-free analytics for a personal investment-tracking dashboard.
Computes trailing returns and risk figures from instrument price histories
and classifies funds into asset-class and region buckets from their
composition breakdown.
"""

__version__ = "0.1.0"
__author__ = "Folio Team"
