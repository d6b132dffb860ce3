"""
Database adapters.
"""
