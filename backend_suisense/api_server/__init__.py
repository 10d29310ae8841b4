"""
API server package: HTTP interface for transaction and error explanations.
"""
