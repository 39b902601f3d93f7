"""
netcoach - contact prioritization engine for career networking.
"""

__version__ = "0.1.0"
