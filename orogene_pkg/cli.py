#!/usr/bin/env python3
"""
Command-line interface for Orogene - static site generator.
"""

import sys
import time
import argparse
from typing import List, Optional

from . import __version__
from .core import Orogene
from .settings import BuildSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='orogene', description='Orogene - A simple static site generator.')
    parser.add_argument('-i', '--input-dir', type=str, required=True,
                        help='The directory containing your source files')
    parser.add_argument('-o', '--output-dir', type=str, required=True,
                        help='The directory where your site will be generated')
    parser.add_argument('-t', '--template-file', type=str, required=True,
                        help='The HTML template file with which to build your pages')
    parser.add_argument('-b', '--post-dir', '--blog-dir', dest='post_dir', type=str,
                        help='The directory containing your blog posts')
    parser.add_argument('-p', '--post-template-file', type=str,
                        help='The HTML template file with which to build your posts (required with --post-dir)')
    parser.add_argument('-l', '--list-template-file', type=str,
                        help='The HTML template file with which to build your post list entries')
    parser.add_argument('-s', '--style-file', type=str,
                        help='The CSS file to attach to your pages')
    parser.add_argument('-a', '--assets-dir', type=str,
                        help='The directory where your static assets are located')
    parser.add_argument('-d', '--directory-per-page', action='store_true',
                        help='Create a separate directory for each output file')
    parser.add_argument('-m', '--minify', action='store_true',
                        help='Minify the output files')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Display verbose generation output')
    parser.add_argument('-f', '--feed', action='store_true',
                        help='Generate an RSS feed of your blog posts (requires --config)')
    parser.add_argument('-c', '--config', dest='config_file', type=str,
                        help='Site configuration file (YAML or JSON) with title, url and description')
    parser.add_argument('--log-dir', type=str,
                        help='Also write a detailed build log to this directory')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = BuildSettings.from_args(vars(args))

    # Record start time
    start_time = time.perf_counter()

    try:
        generator = Orogene(settings)
        generator.build()

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        generator.logger.info(f"Done in {elapsed_ms}ms")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
