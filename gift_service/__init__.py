"""
Gift Service - data access for the gift-management application.

Repositories wrap a hosted record store (Supabase) and translate between
storage records and the camelCase view models consumed by the UI.
"""

__version__ = "1.0.0"
