"""
Shared helper functions.
"""
