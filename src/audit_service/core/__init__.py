"""
Core shared types and utilities for the audit service.

This module provides the domain records exchanged with the storage
collaborators and the small numeric helpers used by the flagging policies.
"""

from audit_service.core.utils import mean, population_std

__all__ = [
    "mean",
    "population_std",
]
