"""
Movie booking client: session handling, resource client and booking workflow state.
"""
__version__ = "1.0.0"
