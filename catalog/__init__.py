"""Catalog service: versioned books and cars with optimistic-concurrency writes."""
