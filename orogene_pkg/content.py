"""
Source documents: reading, front matter, markdown rendering and compiled results.
"""

import os
import re
import yaml
import mistune
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from .errors import BuildError, FrontMatterError

SOURCE_EXTENSIONS = ('.md', '.markdown', '.txt')

DEFAULT_TITLE = 'Untitled'
DEFAULT_DATE = date(1970, 1, 1)

FRONT_MATTER_DELIMITER = '---'
STRICT_DATE_RE = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}$')
MONTH_ABBREVIATIONS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)


@dataclass(frozen=True)
class SourceDocument:
    path: str
    text: str

    @property
    def stem(self) -> str:
        return os.path.splitext(os.path.basename(self.path))[0]


@dataclass(frozen=True)
class FrontMatter:
    title: str = DEFAULT_TITLE
    date: date = DEFAULT_DATE


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != 'tag:yaml.org,2002:timestamp']
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def is_source_file(path: str) -> bool:
    """Only markdown and plain text files are compiled."""
    return os.path.isfile(path) and os.path.splitext(path)[1].lower() in SOURCE_EXTENSIONS


def read_text_file(path: str, what: str = 'input file') -> str:
    """Read a UTF-8 text file, raising BuildError if it can't be read."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (IOError, OSError, UnicodeDecodeError) as e:
        raise BuildError(f"Failed to read {what} {path}: {e}") from e


def load_document(path: str) -> SourceDocument:
    return SourceDocument(path=path, text=read_text_file(path, 'source file'))


def parse_post_date(value: str) -> date:
    """
    Parse a front matter date. Only zero-padded YYYY-MM-DD is accepted.

    Raises:
        FrontMatterError: if the value is not a valid calendar date
    """
    if not isinstance(value, str) or not STRICT_DATE_RE.match(value.strip()):
        raise FrontMatterError(f"Invalid date {value!r}: expected YYYY-MM-DD")
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError as e:
        raise FrontMatterError(f"Invalid date {value!r}: {e}") from e


def format_date(value: date) -> str:
    """Human readable date, e.g. '1 May 2021'."""
    return f"{value.day} {MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def iso_date(value: date) -> str:
    return value.strftime('%Y-%m-%d')


def extract_front_matter(text: str) -> Tuple[FrontMatter, str]:
    """
    Split a document into its front matter and markdown body.

    The document must open with a '---' line and the block is closed by the
    next '---' line. The block is YAML; only 'title' and 'date' are used.

    Returns:
        (FrontMatter, body) tuple

    Raises:
        FrontMatterError: if the block is missing, unterminated, not a mapping,
            or carries a malformed date
    """
    lines = text.lstrip('\ufeff').splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        raise FrontMatterError("Document does not start with a front matter block")

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == FRONT_MATTER_DELIMITER:
            end = i
            break
    if end is None:
        raise FrontMatterError("Front matter block is not terminated")

    try:
        metadata = yaml.load(''.join(lines[1:end]), Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front matter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError("Front matter must be a mapping of keys to values")

    title = metadata.get('title')
    raw_date = metadata.get('date')
    front_matter = FrontMatter(
        title=DEFAULT_TITLE if title is None else str(title),
        date=DEFAULT_DATE if raw_date is None else parse_post_date(raw_date),
    )
    body = ''.join(lines[end + 1:])
    return front_matter, body


def create_markdown_parser():
    """Create a Mistune markdown parser that passes raw HTML through."""
    class CustomRenderer(mistune.HTMLRenderer):
        def __init__(self):
            super().__init__(escape=False)

        def block_code(self, code, info=None):
            escaped_code = mistune.escape(code)
            lang = info.strip().split(None, 1)[0] if info and info.strip() else None
            if lang:
                return '<pre lang="{}"><code>{}</code></pre>\n'.format(mistune.escape(lang), escaped_code)
            return '<pre><code>{}</code></pre>\n'.format(escaped_code)

    return mistune.create_markdown(
        renderer=CustomRenderer(),
        plugins=['table', 'task_lists', 'strikethrough', 'url']
    )


@dataclass(frozen=True)
class CompilationResult:
    """A compiled document. Created once the page is written, never changed."""
    source_path: str
    output_path: str
    html: str
    body: str
    title: Optional[str] = None
    date: Optional[date] = None
    url: Optional[str] = None

    @property
    def is_listable(self) -> bool:
        """Posts need a title, date and URL to be listed or syndicated."""
        return self.title is not None and self.date is not None and self.url is not None
