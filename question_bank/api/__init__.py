"""HTTP presentation layer: storage proxies and the /api/v1 JSON API."""
