"""
Color.io palette engine and HTTP service.
"""

__version__ = "1.0.0"
