"""
Post list rendering for the '{{post_list}}' placeholder.
"""

from typing import Iterable, Optional

from .content import CompilationResult, format_date, iso_date
from .templates import DATE, LINK, TITLE, URL


class PostListRenderer:
    """Turn collection results into an HTML fragment, newest first."""

    def render(self, results: Iterable[CompilationResult]) -> str:
        return ''.join(self.render_entry(result) for result in results if result.is_listable)

    def render_entry(self, result: CompilationResult) -> str:
        raise NotImplementedError


class DefaultPostListRenderer(PostListRenderer):
    """Used when no list template is configured."""

    def render_entry(self, result):
        return (
            f"<article class='post-link'>"
            f"<a href='{result.url}'>{result.title}</a>"
            f"<time datetime='{iso_date(result.date)}'>{format_date(result.date)}</time>"
            f"</article>"
        )


class TemplatedPostListRenderer(PostListRenderer):
    """Fills a user supplied list entry template once per post."""

    def __init__(self, template: str):
        self.template = template

    def render_entry(self, result):
        # {{link}} expands to an anchor around a {{title}} token, which the
        # following title substitution resolves.
        return (self.template
                .replace(URL, result.url)
                .replace(LINK, f"<a href='{result.url}'>{TITLE}</a>")
                .replace(TITLE, result.title)
                .replace(DATE, f"<time datetime='{iso_date(result.date)}'>{format_date(result.date)}</time>"))


def make_post_list_renderer(template: Optional[str]) -> PostListRenderer:
    if template:
        return TemplatedPostListRenderer(template)
    return DefaultPostListRenderer()
