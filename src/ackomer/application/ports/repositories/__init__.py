"""
Repository interfaces.
"""
