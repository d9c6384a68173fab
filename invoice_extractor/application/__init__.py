"""
Application layer.

Service orchestrators sitting between the HTTP routers and the core/boundary
layers.
"""
