"""
Command line tools: releasy-emit and releasy-handler.
"""
