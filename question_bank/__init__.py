"""Past question archive service: storage proxies and the catalog API over Supabase."""

__version__ = "1.0.0"
