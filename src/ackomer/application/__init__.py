"""
Application layer: ports and use cases.
"""
