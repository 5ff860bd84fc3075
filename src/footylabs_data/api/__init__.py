"""
HTTP API for FootyLabs Data.
"""
