"""
Business logic services for the booking wizard.
"""
