"""
External service interfaces.
"""
