"""
releasy - cross-repository CI signaling driven by a dependency manifest.
"""

__version__ = "0.1.0"
