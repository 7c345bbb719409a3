"""Test configuration and fixtures for Orogene tests."""

import pytest
import tempfile
import shutil
from pathlib import Path

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <style>{{style}}</style>
</head>
<body>
    {{content}}
</body>
</html>"""

POST_TEMPLATE = """<article>
    <h1>{{title}}</h1>
    <p>{{date}}</p>
    {{content}}
    <footer>{{title}} - {{date}}</footer>
</article>"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create a templates directory with a page and a post template."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()
    (templates_dir / 'page.html').write_text(PAGE_TEMPLATE)
    (templates_dir / 'post.html').write_text(POST_TEMPLATE)
    (templates_dir / 'style.css').write_text("body {\n    color: black;\n}\n")
    return str(templates_dir)


@pytest.fixture
def mock_content_dir(temp_dir):
    """Create a source tree with two pages and two dated blog posts."""
    content_dir = Path(temp_dir) / 'src'
    blog_dir = content_dir / 'blog'
    blog_dir.mkdir(parents=True)

    (content_dir / 'index.md').write_text("# Home\n\n{{post_list}}\n")
    (content_dir / 'about.md').write_text("# About\n\nThis is the about page.\n")

    (blog_dir / '2021-05-01-first.md').write_text("""---
title: First
date: 2021-05-01
---
# Hi

The first post.
""")
    (blog_dir / '2021-06-01-second.md').write_text("""---
title: Second
date: "2021-06-01"
---
The second post.
""")
    return str(content_dir)


@pytest.fixture
def mock_output_dir(temp_dir):
    """Path of a not yet existing output directory."""
    return str(Path(temp_dir) / 'build')


@pytest.fixture
def site_config_file(temp_dir):
    config_file = Path(temp_dir) / 'site.yml'
    config_file.write_text("title: Example\nurl: https://example.com\ndescription: Notes\n")
    return str(config_file)


@pytest.fixture
def make_settings(mock_content_dir, mock_templates_dir, mock_output_dir):
    """Factory for BuildSettings pointing at the mock site."""
    from orogene_pkg.settings import BuildSettings

    def factory(**overrides):
        values = {
            'input_dir': mock_content_dir,
            'output_dir': mock_output_dir,
            'template_file': str(Path(mock_templates_dir) / 'page.html'),
            'post_dir': str(Path(mock_content_dir) / 'blog'),
            'post_template_file': str(Path(mock_templates_dir) / 'post.html'),
        }
        values.update(overrides)
        return BuildSettings(**values)

    return factory
