"""
RSS feed generation for the post collection.
"""

import os
import calendar
import logging
from email.utils import formatdate
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from .content import CompilationResult
from .errors import BuildError, ConfigError
from .settings import SiteConfig

FEED_FILENAME = 'feed.rss'


def rss_date(value) -> str:
    """RFC 822 date for midnight UTC of the given day."""
    return formatdate(calendar.timegm(value.timetuple()), usegmt=True)


def synthesize_feed(config: Optional[SiteConfig], results: Iterable[CompilationResult]) -> str:
    """
    Build an RSS 2.0 document from compiled posts.

    Item links are the site URL and the post URL joined as given, without
    any normalization, so 'https://x/' and '/p' give 'https://x//p'.

    Args:
        config: Site configuration providing the channel metadata
        results: Compiled posts in the order they should appear

    Returns:
        The feed document as a string
    """
    if config is None:
        raise ConfigError("A site configuration file is required to generate the feed")

    rss_content = f'''<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
<channel>
<title>{escape(config.title)}</title>
<link>{escape(config.url)}</link>
<description>{escape(config.description)}</description>
'''

    for post in results:
        link = escape(config.url + (post.url or ''))
        rss_content += f'''
<item>
<title>{escape(post.title or '')}</title>
<link>{link}</link>
<guid isPermaLink="true">{link}</guid>
'''
        if post.date is not None:
            rss_content += f"<pubDate>{rss_date(post.date)}</pubDate>\n"
        rss_content += f'''<description>{escape(post.body)}</description>
</item>'''

    rss_content += '''
</channel>
</rss>
'''
    return rss_content


class FeedStep:
    """Runs after the page pass with the collection results."""

    def write(self, output_dir: str, results) -> Optional[str]:
        raise NotImplementedError


class NoFeed(FeedStep):
    def write(self, output_dir, results):
        return None


class RssFeed(FeedStep):
    """Writes feed.rss into the output root."""

    def __init__(self, config: Optional[SiteConfig], logger: Optional[logging.Logger] = None):
        if config is None:
            raise ConfigError("A site configuration file is required to generate the feed")
        self.config = config
        self.logger = logger or logging.getLogger('Orogene')

    def write(self, output_dir, results):
        rss_file = os.path.join(output_dir, FEED_FILENAME)
        self.logger.info(f"Writing feed: {rss_file}")
        rss_content = synthesize_feed(self.config, results)
        try:
            with open(rss_file, 'w', encoding='utf-8') as f:
                f.write(rss_content)
        except (IOError, OSError) as e:
            raise BuildError(f"Failed to write RSS feed file {rss_file}: {e}") from e
        return rss_file
