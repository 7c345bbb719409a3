"""Tests for post list rendering."""

import os
from datetime import date

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from orogene_pkg.content import CompilationResult
from orogene_pkg.post_list import (
    DefaultPostListRenderer,
    TemplatedPostListRenderer,
    make_post_list_renderer,
)


def make_post(title, day, url):
    return CompilationResult(
        source_path=f'blog/{title}.md', output_path=f'build{url}/index.html',
        html='', body='', title=title, date=day, url=url,
    )


POSTS = (
    make_post('Second', date(2021, 6, 1), '/blog/second'),
    make_post('First', date(2021, 5, 1), '/blog/first'),
)


class TestPostListRenderer:
    """Test cases for the post list renderers."""

    def test_factory(self):
        assert isinstance(make_post_list_renderer(None), DefaultPostListRenderer)
        assert isinstance(make_post_list_renderer(''), DefaultPostListRenderer)
        assert isinstance(make_post_list_renderer('<li>{{link}}</li>'), TemplatedPostListRenderer)

    def test_default_fragments(self):
        """Test two posts give exactly two default fragments, in order."""
        html = DefaultPostListRenderer().render(POSTS)
        assert html == (
            "<article class='post-link'><a href='/blog/second'>Second</a>"
            "<time datetime='2021-06-01'>1 Jun 2021</time></article>"
            "<article class='post-link'><a href='/blog/first'>First</a>"
            "<time datetime='2021-05-01'>1 May 2021</time></article>"
        )

    def test_templated(self):
        renderer = TemplatedPostListRenderer("<li>{{link}} ({{date}}) {{url}} {{title}}</li>")
        html = renderer.render(POSTS[:1])
        assert html == (
            "<li><a href='/blog/second'>Second</a> "
            "(<time datetime='2021-06-01'>1 Jun 2021</time>) /blog/second Second</li>"
        )

    def test_incomplete_results_are_skipped(self):
        page = CompilationResult(source_path='about.md', output_path='build/about.html',
                                 html='', body='', url='/about.html')
        assert DefaultPostListRenderer().render((page,)) == ''

    def test_empty(self):
        assert make_post_list_renderer('<li>{{link}}</li>').render(()) == ''
