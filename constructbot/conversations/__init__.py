"""
In-memory conversation history for the construction assistant.
"""
