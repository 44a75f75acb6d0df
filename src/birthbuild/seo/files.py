"""
robots.txt and sitemap.xml builders.
"""

from __future__ import annotations

from typing import Iterable, Optional
from xml.sax.saxutils import escape

from ..util.time import today_iso

AI_CRAWLERS = (
    "GPTBot",
    "ChatGPT-User",
    "ClaudeBot",
    "PerplexityBot",
    "Google-Extended",
    "Applebot-Extended",
)


def generate_robots_txt(base_url: str) -> str:
    """Allow everything, name the AI crawlers explicitly, and point at the sitemap."""
    blocks = ["User-agent: *\nAllow: /"]
    blocks.extend(f"User-agent: {agent}\nAllow: /" for agent in AI_CRAWLERS)
    blocks.append(f"Sitemap: {base_url}/sitemap.xml")
    return "\n\n".join(blocks) + "\n"


def generate_sitemap(filenames: Iterable[str], base_url: str, lastmod: Optional[str] = None) -> str:
    """
    Build a sitemap with one <url> per page; the home page gets priority 1.0.
    """
    stamp = lastmod or today_iso()
    entries = []
    for filename in filenames:
        priority = "1.0" if filename == "index.html" else "0.8"
        entries.append(
            "  <url>\n"
            f"    <loc>{escape(f'{base_url}/{filename}')}</loc>\n"
            f"    <lastmod>{stamp}</lastmod>\n"
            "    <changefreq>monthly</changefreq>\n"
            f"    <priority>{priority}</priority>\n"
            "  </url>"
        )
    body = "\n".join(entries)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{body}\n"
        "</urlset>\n"
    )
