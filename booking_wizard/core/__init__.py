"""
Core domain types: enums, models and exceptions.
"""
