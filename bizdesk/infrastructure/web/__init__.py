"""
Web layer: routers, dependencies and error handling.
"""
