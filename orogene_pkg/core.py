import os
import sys
import shutil
import logging
import htmlmin
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .content import (
    CompilationResult,
    create_markdown_parser,
    extract_front_matter,
    is_source_file,
    load_document,
)
from .errors import BuildError, MinifyError
from .feed import FeedStep, NoFeed, RssFeed
from .paths import display_name, prepare_output, resolve_output
from .post_list import PostListRenderer, make_post_list_renderer
from .settings import BuildSettings, load_site_config
from .templates import Templates, apply_post_list, apply_style, compose, has_post_list

Results = Tuple[CompilationResult, ...]


def minify_html(html_content):
    """Minify a generated page, raising MinifyError if the HTML is rejected."""
    try:
        return htmlmin.minify(
            html_content,
            remove_comments=True,
            remove_empty_space=True,
            keep_pre=True
        )
    except Exception as e:
        raise MinifyError(f"HTML minification failed: {e}") from e


@dataclass(frozen=True)
class BuildPass:
    """Parameters of one run of the build stage over a directory."""
    source_dir: str
    output_dir: str
    front_matter: bool = False
    item_template: Optional[str] = None
    prior_results: Optional[Results] = None
    subdir: Optional[str] = None
    at_site_root: bool = True


class FileProcessor:
    """Compiles source documents into pages, one build pass at a time."""

    def __init__(self, settings: BuildSettings, templates: Templates,
                 post_list_renderer: Optional[PostListRenderer] = None, logger=None):
        self.settings = settings
        self.templates = templates
        self.post_list_renderer = post_list_renderer or make_post_list_renderer(templates.post_list)
        self.logger = logger or logging.getLogger('Orogene')
        self.markdown_parser = create_markdown_parser()

    def markdown_filter(self, text):
        """Convert markdown text to HTML."""
        return self.markdown_parser(text)

    def get_source_files(self, directory):
        """Directory entries ordered by path, descending (newest first for dated names)."""
        try:
            entries = os.listdir(directory)
        except (IOError, OSError) as e:
            raise BuildError(f"Failed to read source directory {directory}: {e}") from e
        return sorted((os.path.join(directory, entry) for entry in entries), reverse=True)

    def run_pass(self, build_pass: BuildPass) -> Results:
        """Compile every source document of a directory, preserving order."""
        compiled = (self.process(path, build_pass) for path in self.get_source_files(build_pass.source_dir))
        return tuple(result for result in compiled if result is not None)

    def process(self, file_path, build_pass: BuildPass) -> Optional[CompilationResult]:
        """Compile and write a single document. Non-source files give None."""
        if not is_source_file(file_path):
            return None

        name = display_name(file_path)
        document = load_document(file_path)
        self.logger.info(f"Generating HTML file: {name}.html")

        metadata = None
        body = document.text
        if build_pass.front_matter:
            metadata, body = extract_front_matter(document.text)

        rendered_content = self.markdown_filter(body)
        result = compose(self.templates.page, build_pass.item_template, rendered_content, metadata)

        if self.templates.style is not None:
            self.logger.info("    Including CSS")
            result = apply_style(result, self.templates.style)

        if build_pass.prior_results is not None and has_post_list(result):
            self.logger.info("    Including post list")
            result = apply_post_list(result, self.post_list_renderer.render(build_pass.prior_results))

        target = resolve_output(
            build_pass.output_dir, name,
            directory_per_page=self.settings.directory_per_page,
            at_site_root=build_pass.at_site_root,
            collection_name=self.settings.collection_name,
            subdir=build_pass.subdir,
        )
        if target.create_directory:
            self.logger.info("    Creating page directory")
        prepare_output(target)

        if self.settings.minify:
            self.logger.info("    Minifying")
            result = minify_html(result)

        self.write_file(target.file_path, result)

        return CompilationResult(
            source_path=file_path,
            output_path=target.file_path,
            html=result,
            body=body,
            title=metadata.title if metadata else None,
            date=metadata.date if metadata else None,
            url=target.url,
        )

    def write_file(self, output_file_path, content):
        try:
            with open(output_file_path, 'w', encoding='utf-8') as output_file:
                output_file.write(content)
        except (IOError, OSError) as e:
            raise BuildError(f"Failed to write HTML file {output_file_path}: {e}") from e
        self.logger.info("    Writing file")


class ConsoleFilter(logging.Filter):
    """Filter to allow only the build summary and problems on the console, unless verbose."""

    SUMMARY_MESSAGES = (
        "Done in",
    )

    def __init__(self, verbose=False):
        super().__init__()
        self.verbose = verbose

    def filter(self, record):
        if self.verbose or record.levelno >= logging.WARNING:
            return True
        return any(msg in record.getMessage() for msg in self.SUMMARY_MESSAGES)


class Orogene:
    """Builds a site: posts first, then top-level pages, then the feed."""

    def __init__(self, settings: BuildSettings):
        self.settings = settings
        self.output_dir = settings.output_dir
        self.posts: Results = ()
        self.pages: Results = ()

        self.setup_logging()

        self.site_config = load_site_config(settings.config_file) if settings.config_file else None
        self.feed: FeedStep = RssFeed(self.site_config, self.logger) if settings.feed else NoFeed()

        self.templates = Templates.load(settings)
        self.processor = FileProcessor(settings, self.templates, logger=self.logger)

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Orogene')
        self.logger.setLevel(logging.DEBUG)

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.addFilter(ConsoleFilter(self.settings.verbose))
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        self.logger.addHandler(console_handler)

        if self.settings.log_dir:
            # File handler for all logs
            os.makedirs(self.settings.log_dir, exist_ok=True)
            log_filename = datetime.now().strftime('orogene_%Y-%m-%d_%H-%M-%S.log')
            file_handler = logging.FileHandler(os.path.join(self.settings.log_dir, log_filename))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            self.logger.addHandler(file_handler)

    @property
    def posts_generated(self):
        return len(self.posts)

    @property
    def pages_generated(self):
        return len(self.pages)

    def create_output_dir(self):
        """Delete and recreate the output directory."""
        self.logger.info(f"Recreating build directory: {self.output_dir}")
        try:
            if os.path.exists(self.output_dir):
                shutil.rmtree(self.output_dir)
            os.makedirs(self.output_dir)
        except (IOError, OSError) as e:
            raise BuildError(f"Failed to recreate output directory {self.output_dir}: {e}") from e

    def copy_assets_to_output(self):
        """Copy the assets directory verbatim into the output root."""
        assets_dir = self.settings.assets_dir
        if not assets_dir:
            return None
        dest_path = os.path.join(self.output_dir, os.path.basename(os.path.normpath(assets_dir)))
        self.logger.info(f"Copying assets directory: {assets_dir} > {dest_path}")
        try:
            shutil.copytree(assets_dir, dest_path)
        except (IOError, OSError, shutil.Error) as e:
            raise BuildError(f"Failed to copy assets directory {assets_dir}: {e}") from e
        return dest_path

    def collect_posts(self) -> Results:
        """Compile the post collection into its own output subdirectory."""
        post_dir = self.settings.post_dir
        if not post_dir:
            return ()
        if self.templates.post is None:
            self.logger.warning(
                f"Post directory {post_dir} is set but no post template was given; skipping posts."
            )
            return ()

        collection_name = self.settings.collection_name
        dest_path = os.path.join(self.output_dir, collection_name)
        try:
            os.mkdir(dest_path)
        except (IOError, OSError) as e:
            raise BuildError(f"Failed to create posts directory {dest_path}: {e}") from e

        return self.processor.run_pass(BuildPass(
            source_dir=post_dir,
            output_dir=dest_path,
            front_matter=True,
            item_template=self.templates.post,
            subdir=collection_name,
            at_site_root=False,
        ))

    def build_pages(self, posts: Results) -> Results:
        """Compile the top level pages, which may list the given posts."""
        return self.processor.run_pass(BuildPass(
            source_dir=self.settings.input_dir,
            output_dir=self.output_dir,
            prior_results=posts,
        ))

    def build(self):
        """Main build process."""
        self.create_output_dir()
        self.copy_assets_to_output()

        self.posts = self.collect_posts()
        self.pages = self.build_pages(self.posts)
        self.feed.write(self.output_dir, self.posts)

        return self.posts, self.pages
