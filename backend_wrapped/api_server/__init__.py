"""
API server: read-only HTTP surface over the wrapped pipeline.
"""
