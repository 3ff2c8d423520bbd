"""SEO dashboard backend: keyword cache and relay endpoints."""
