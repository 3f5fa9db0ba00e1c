"""
Construction chat: domain guard, prompt assembly and the response fallback chain.
"""
