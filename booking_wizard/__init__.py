"""
Service booking wizard with payment gateway integration.
"""

__version__ = "1.0.0"
