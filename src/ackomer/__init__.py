"""
Acko-MER AI - medical consultation transcription and summarization backend.
"""

__version__ = "1.0.0"
