"""Plugin identity and the web pages it ships."""

from pathlib import Path
from typing import Dict, List, Optional

from .models import PluginPage

PLUGIN_NAME = "Smack"
PLUGIN_ID = "11111111-2222-3333-4444-555555555555"

WEB_DIR = Path(__file__).parent / "web"

# Page name -> HTML file under WEB_DIR
PLUGIN_PAGES: Dict[str, str] = {
    PLUGIN_NAME: "configPage.html",
    "SmackBrowser": "smackBrowser.html",
}


def get_pages() -> List[PluginPage]:
    return [PluginPage(name=name, path=f"/web/{name}") for name in PLUGIN_PAGES]


def get_page_file(page_name: str) -> Optional[Path]:
    """Resolve a page name to its HTML file, or None for unknown pages."""
    filename = PLUGIN_PAGES.get(page_name)
    if filename is None:
        return None
    path = WEB_DIR / filename
    return path if path.is_file() else None
