"""
Output path and public URL resolution.
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from .errors import BuildError

# YYYY-MM-DD plus one separator character
DATE_PREFIX_RE = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}.', re.DOTALL)
DATE_PREFIX_LENGTH = 11


@dataclass(frozen=True)
class OutputTarget:
    """Where a compiled document goes and how it is linked."""
    file_path: str
    url: str
    directory: Optional[str] = None
    create_directory: bool = False


def display_name(source_path: str) -> str:
    """
    Derive the page name from a source file path.

    The extension is dropped, then a leading 'YYYY-MM-DD-' date prefix.
    '2021-05-01-hello-world.md' becomes 'hello-world'.
    """
    name = os.path.splitext(os.path.basename(source_path))[0]
    if DATE_PREFIX_RE.match(name):
        name = name[DATE_PREFIX_LENGTH:]
    return name


def resolve_output(base_dir: str, name: str, directory_per_page: bool,
                   at_site_root: bool, collection_name: Optional[str] = None,
                   subdir: Optional[str] = None) -> OutputTarget:
    """
    Work out the output file and public URL for a page.

    Args:
        base_dir: Directory the page is written under
        name: Display name of the page
        directory_per_page: Write 'name/index.html' instead of 'name.html'
        at_site_root: True when base_dir is the site root (the page pass)
        collection_name: Output directory name of the post collection
        subdir: URL path segment between the site root and the page

    Returns:
        OutputTarget for the page
    """
    url_prefix = f"/{subdir}/" if subdir else '/'

    if not directory_per_page:
        return OutputTarget(
            file_path=os.path.join(base_dir, f"{name}.html"),
            url=f"{url_prefix}{name}.html",
        )

    if name == 'index':
        return OutputTarget(file_path=os.path.join(base_dir, 'index.html'), url=url_prefix)

    page_dir = os.path.join(base_dir, name)
    # A top-level page named like the post collection shares its directory
    shares_collection = at_site_root and collection_name is not None and name == collection_name
    return OutputTarget(
        file_path=os.path.join(page_dir, 'index.html'),
        url=f"{url_prefix}{name}",
        directory=page_dir,
        create_directory=not shares_collection,
    )


def prepare_output(target: OutputTarget) -> None:
    """Create the page directory of a target, if it needs one."""
    if target.directory is None:
        return
    try:
        if target.create_directory:
            os.mkdir(target.directory)
        else:
            os.makedirs(target.directory, exist_ok=True)
    except FileExistsError as e:
        raise BuildError(f"Output directory already exists: {target.directory}") from e
    except (IOError, OSError) as e:
        raise BuildError(f"Failed to create output directory {target.directory}: {e}") from e
