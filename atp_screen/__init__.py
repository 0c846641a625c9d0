"""
ATP yield screening of COBRA metabolic reconstructions.
"""

from .atp_yield import test_atp
from .screening import ATPScreening

__version__ = "1.0.0"

__all__ = ["ATPScreening", "test_atp", "__version__"]
