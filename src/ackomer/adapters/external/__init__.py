"""
Adapters for third-party APIs (speech, Azure OpenAI).
"""
