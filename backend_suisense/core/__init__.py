"""
Core utilities: exceptions shared by the RPC client, anchoring and API server.
"""
