"""
Ports (interfaces) implemented by adapters.
"""
