"""Long-running services used by the web server."""

from .auto_update import AutoUpdateService, scrapers_for
from .viewers import ViewerCounter, viewer_id_for

__all__ = [
    'AutoUpdateService',
    'scrapers_for',
    'ViewerCounter',
    'viewer_id_for',
]
