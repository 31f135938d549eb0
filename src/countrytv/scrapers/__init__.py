"""
Scrapers that produce candidate songs for the playlist.

Each module can be run on its own, e.g. `python -m countrytv.scrapers.youtube`.
"""

SCRAPER_MODULES = {
    'youtube': 'countrytv.scrapers.youtube',
    'spotify': 'countrytv.scrapers.spotify',
    'wikipedia': 'countrytv.scrapers.wikipedia',
    'billboard': 'countrytv.scrapers.billboard',
    'manual': 'countrytv.scrapers.manual',
}
