"""
API routes package for Parity.
"""
from api.routes import comparison, results, sections, system

__all__ = ["comparison", "results", "sections", "system"]
