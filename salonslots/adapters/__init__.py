"""
Adapters layer - Salon data sources (hosted database, JSON snapshot).
"""

from .json_store import JsonSalonStore
from .supabase_client import SupabaseClient

__all__ = ["JsonSalonStore", "SupabaseClient"]
