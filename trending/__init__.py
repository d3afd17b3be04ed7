"""Trending movies scraper, cache and HTTP API."""
