"""
Scrapers package.

Each scraper module exposes:
- SOURCE_URL: the page it reads
- parse(html): markup -> list of JSON-ready entry dicts (no network access)

Parsers never raise on missing elements; absent fields fall back to
empty/None and incomplete rows are dropped where the scraper requires it.
"""
