"""
MongoDB (Beanie) persistence.
"""
