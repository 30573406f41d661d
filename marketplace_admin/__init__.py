"""Admin dashboard for a multi-sided marketplace, backed by Supabase."""

__version__ = "0.1.0"
