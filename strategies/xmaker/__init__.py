"""
XMaker Strategy - quotes on a maker session, hedges on a source session
"""

from .config import XMakerStrategy

__all__ = [
    "XMakerStrategy",
]
