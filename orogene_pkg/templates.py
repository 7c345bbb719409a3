"""
Template loading and placeholder substitution.

Templates are plain HTML with '{{name}}' tokens. Each substitution replaces
every occurrence of its token; tokens nobody fills in are left as they are.
"""

import csscompressor
from dataclasses import dataclass
from typing import Optional

from .content import FrontMatter, format_date, read_text_file
from .settings import BuildSettings

CONTENT = '{{content}}'
TITLE = '{{title}}'
DATE = '{{date}}'
STYLE = '{{style}}'
POST_LIST = '{{post_list}}'
URL = '{{url}}'
LINK = '{{link}}'


@dataclass(frozen=True)
class Templates:
    """Every template and the stylesheet of a build, read once."""
    page: str
    post: Optional[str] = None
    post_list: Optional[str] = None
    style: Optional[str] = None

    @classmethod
    def load(cls, settings: BuildSettings) -> 'Templates':
        def optional(path, what):
            return read_text_file(path, what) if path else None

        style = optional(settings.style_file, 'stylesheet')
        if style is not None and settings.minify:
            style = csscompressor.compress(style)

        return cls(
            page=read_text_file(settings.template_file, 'template file'),
            post=optional(settings.post_template_file, 'post template file'),
            post_list=optional(settings.list_template_file, 'list template file'),
            style=style,
        )


def compose(page_template: str, item_template: Optional[str], rendered_html: str,
            metadata: Optional[FrontMatter] = None) -> str:
    """
    Place rendered content into its templates.

    With an item template the post title, date and content are filled into
    it first and the result becomes the page's content. Without one the
    rendered body goes straight into the page template.
    """
    if item_template is not None:
        metadata = metadata or FrontMatter()
        item = (item_template
                .replace(TITLE, metadata.title)
                .replace(DATE, format_date(metadata.date))
                .replace(CONTENT, rendered_html))
        return page_template.replace(CONTENT, item)
    return page_template.replace(CONTENT, rendered_html)


def apply_style(html: str, style: str) -> str:
    return html.replace(STYLE, style)


def apply_post_list(html: str, post_list_html: str) -> str:
    return html.replace(POST_LIST, post_list_html)


def has_post_list(html: str) -> bool:
    return POST_LIST in html
