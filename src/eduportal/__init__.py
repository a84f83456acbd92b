"""eduportal - class-scoped practice questions backed by Supabase."""

__version__ = "0.1.0"
