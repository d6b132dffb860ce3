"""
MongoDB repository implementations.
"""
