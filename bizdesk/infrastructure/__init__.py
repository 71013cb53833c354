"""
Infrastructure layer: persistence and web adapters.
"""
