"""
Pipeline components for contact prioritization.

Scoring feeds tracking and planning; aggregation turns imported
interaction batches into scored contacts. Subpackages expose the primary
services that callers use.
"""

__all__ = ["aggregation", "planning", "scoring", "tracking"]
