"""
Bizdesk: backend for a freelancer business-management app.
"""

__version__ = "1.0.0"
