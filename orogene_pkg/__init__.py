"""
Orogene - A simple static site generator.

Orogene turns a directory of Markdown and text files into a static site by
filling plain HTML templates. It supports dated blog posts with front matter,
an auto-generated post list, an RSS feed, and one directory per page output.
"""

__version__ = "0.3.0"
__author__ = "Raphael Kabo"
__email__ = "mail@raphaelkabo.com"

from .core import Orogene, FileProcessor, BuildPass
from .settings import BuildSettings, SiteConfig

__all__ = ['Orogene', 'FileProcessor', 'BuildPass', 'BuildSettings', 'SiteConfig']
