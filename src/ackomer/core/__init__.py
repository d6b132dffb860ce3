"""
Core utilities: configuration, exceptions, logging and the AI client.
"""
