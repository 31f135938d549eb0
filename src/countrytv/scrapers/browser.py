"""
Shared headless Chromium for the scrapers.

YouTube and Spotify only render their lists with JavaScript, so those
scrapers drive a real browser through Playwright. Pages are handed back to
the caller; HTML is then parsed with BeautifulSoup.
"""

import sys
from typing import Optional

# Playwright browser instance (lazy loaded)
_browser = None
_playwright = None

LAUNCH_ARGS = ['--no-sandbox', '--disable-setuid-sandbox']
DESKTOP_USER_AGENT = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

NAVIGATION_TIMEOUT_MS = 60000


def get_browser(headless: bool = True):
    """Get or create a Playwright browser instance."""
    global _browser, _playwright
    if _browser is None:
        from playwright.sync_api import sync_playwright
        _playwright = sync_playwright().start()
        _browser = _playwright.chromium.launch(headless=headless, args=LAUNCH_ARGS)
    return _browser


def close_browser():
    """Close the Playwright browser if open."""
    global _browser, _playwright
    if _browser:
        _browser.close()
        _browser = None
    if _playwright:
        _playwright.stop()
        _playwright = None


def new_page(user_agent: Optional[str] = None, headless: bool = True):
    """Open a fresh page, optionally in its own context with a custom user agent."""
    browser = get_browser(headless=headless)
    if user_agent:
        context = browser.new_context(user_agent=user_agent)
        return context.new_page()
    return browser.new_page()


def open_url(page, url: str, timeout: int = NAVIGATION_TIMEOUT_MS, settle_ms: int = 0) -> bool:
    """Navigate and optionally wait for late content. Returns False on failure."""
    try:
        page.goto(url, wait_until='domcontentloaded', timeout=timeout)
        if settle_ms:
            page.wait_for_timeout(settle_ms)
        return True
    except Exception as e:
        print(f"  [ERROR] Could not load {url}: {e}", file=sys.stderr)
        return False


def scroll_to_end(page, pause_ms: int = 2000, max_rounds: int = 50):
    """Scroll until the page stops growing (infinite-scroll lists)."""
    previous = 0
    current = page.evaluate('() => document.body.scrollHeight')
    rounds = 0
    while previous != current and rounds < max_rounds:
        page.evaluate('() => window.scrollTo(0, document.body.scrollHeight)')
        page.wait_for_timeout(pause_ms)
        previous = current
        current = page.evaluate('() => document.body.scrollHeight')
        rounds += 1


def scroll_rounds(page, rounds: int, pause_ms: int = 1000, by_viewport: bool = False):
    """Scroll a fixed number of times."""
    script = ('() => window.scrollBy(0, window.innerHeight)' if by_viewport
              else '() => window.scrollTo(0, document.body.scrollHeight)')
    for _ in range(rounds):
        page.evaluate(script)
        page.wait_for_timeout(pause_ms)
