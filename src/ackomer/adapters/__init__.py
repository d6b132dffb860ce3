"""
Adapters: persistence, external services and cache.
"""
