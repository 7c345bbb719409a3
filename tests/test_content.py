"""Tests for front matter extraction, dates and markdown rendering."""

import pytest
import os
import locale
from datetime import date

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from orogene_pkg.content import (
    DEFAULT_DATE,
    DEFAULT_TITLE,
    create_markdown_parser,
    extract_front_matter,
    format_date,
    is_source_file,
    iso_date,
    parse_post_date,
    read_text_file,
)
from orogene_pkg.errors import BuildError, FrontMatterError


class TestFrontMatter:
    """Test cases for extract_front_matter."""

    def test_title_date_and_body(self):
        """Test a complete front matter block."""
        front_matter, body = extract_front_matter("---\ntitle: T\ndate: 2021-05-01\n---\n# Hi\n")

        assert front_matter.title == 'T'
        assert front_matter.date == date(2021, 5, 1)
        assert body == "# Hi\n"

    def test_quoted_date(self):
        front_matter, _ = extract_front_matter('---\ndate: "2021-05-01"\n---\nbody')
        assert front_matter.date == date(2021, 5, 1)

    def test_missing_keys_use_defaults(self):
        """Test that title and date fall back to their defaults."""
        front_matter, body = extract_front_matter("---\nauthor: someone\n---\ntext\n")

        assert front_matter.title == DEFAULT_TITLE == 'Untitled'
        assert front_matter.date == DEFAULT_DATE == date(1970, 1, 1)
        assert body == "text\n"

    def test_empty_block(self):
        front_matter, body = extract_front_matter("---\n---\ntext")
        assert front_matter.title == 'Untitled'
        assert body == "text"

    def test_non_string_title(self):
        front_matter, _ = extract_front_matter("---\ntitle: 2021\n---\n")
        assert front_matter.title == '2021'

    def test_byte_order_mark(self):
        front_matter, _ = extract_front_matter("\ufeff---\ntitle: BOM\n---\n")
        assert front_matter.title == 'BOM'

    def test_missing_block(self):
        """Test that a document without front matter is rejected."""
        with pytest.raises(FrontMatterError, match="does not start"):
            extract_front_matter("# Just markdown\n")

    def test_block_not_at_start(self):
        with pytest.raises(FrontMatterError):
            extract_front_matter("intro\n---\ntitle: T\n---\n")

    def test_unterminated_block(self):
        with pytest.raises(FrontMatterError, match="not terminated"):
            extract_front_matter("---\ntitle: T\n# Hi\n")

    def test_invalid_yaml(self):
        with pytest.raises(FrontMatterError, match="Invalid YAML"):
            extract_front_matter("---\ntitle: [unclosed\n---\n")

    def test_non_mapping_block(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            extract_front_matter("---\n- a\n- b\n---\n")

    @pytest.mark.parametrize('value', ['2021-13-01', '2021-5-1', 'May 1, 2021', '2021-02-30', '01-05-2021'])
    def test_malformed_date_is_fatal(self, value):
        """Test that a present but malformed date is never defaulted."""
        with pytest.raises(FrontMatterError):
            extract_front_matter(f"---\ntitle: T\ndate: {value}\n---\n")


class TestDates:
    """Test cases for date parsing and formatting."""

    def test_parse_post_date(self):
        assert parse_post_date('2021-05-01') == date(2021, 5, 1)

    def test_parse_post_date_rejects_non_strings(self):
        with pytest.raises(FrontMatterError):
            parse_post_date(20210501)

    def test_format_date(self):
        """Test the human readable format has no day padding."""
        assert format_date(date(2021, 5, 1)) == '1 May 2021'
        assert format_date(date(2020, 12, 25)) == '25 Dec 2020'

    def test_format_date_ignores_locale(self):
        """Test month names stay English whatever LC_TIME the process uses."""
        saved = locale.setlocale(locale.LC_TIME)
        for candidate in ('de_DE.UTF-8', 'fr_FR.UTF-8', 'C'):
            try:
                locale.setlocale(locale.LC_TIME, candidate)
                break
            except locale.Error:
                continue
        try:
            assert format_date(date(2021, 5, 1)) == '1 May 2021'
            assert [format_date(date(2021, month, 3)).split()[1] for month in range(1, 13)] == [
                'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
            ]
        finally:
            locale.setlocale(locale.LC_TIME, saved)

    def test_iso_date(self):
        assert iso_date(date(2021, 5, 1)) == '2021-05-01'


class TestSourceFiles:
    """Test cases for reading source documents."""

    def test_is_source_file(self, temp_dir):
        for name in ['page.md', 'notes.txt', 'long.markdown', 'page.html', 'image.png', 'README']:
            with open(os.path.join(temp_dir, name), 'w') as f:
                f.write('x')
        os.mkdir(os.path.join(temp_dir, 'folder.md'))

        sources = sorted(name for name in os.listdir(temp_dir) if is_source_file(os.path.join(temp_dir, name)))
        assert sources == ['long.markdown', 'notes.txt', 'page.md']

    def test_read_text_file_missing(self, temp_dir):
        with pytest.raises(BuildError, match="Failed to read template file"):
            read_text_file(os.path.join(temp_dir, 'missing.html'), 'template file')


class TestMarkdown:
    """Test cases for the markdown parser."""

    def test_heading(self):
        parser = create_markdown_parser()
        assert '<h1>Hi</h1>' in parser("# Hi\n")

    def test_raw_html_passes_through(self):
        parser = create_markdown_parser()
        assert '<div class="note">x</div>' in parser('<div class="note">x</div>\n')

    def test_code_block_language(self):
        parser = create_markdown_parser()
        html = parser("```python\nprint('<hi>')\n```\n")
        assert '<pre lang="python"><code>' in html
        assert '&lt;hi&gt;' in html

    def test_placeholders_survive(self):
        parser = create_markdown_parser()
        assert '{{post_list}}' in parser("{{post_list}}\n")
