#!/usr/bin/env python3
"""
Settings for the Orogene static site generator.

A build is described by a single immutable BuildSettings value, resolved once
from the command line and handed to every component. The optional site
configuration (needed only for the RSS feed) is read from a YAML or JSON
file.
"""

import os
import json
import yaml
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ConfigError


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide metadata used for the feed channel."""
    title: str
    url: str
    description: str

    REQUIRED_KEYS = ('title', 'url', 'description')

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], source: str = '<config>') -> 'SiteConfig':
        """
        Build a SiteConfig from a parsed mapping.

        Args:
            data: Parsed configuration mapping
            source: Where the mapping came from, for error messages

        Returns:
            SiteConfig instance
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {source} must contain a mapping")

        missing = [key for key in cls.REQUIRED_KEYS if data.get(key) is None]
        if missing:
            raise ConfigError(f"Configuration file {source} is missing: {', '.join(missing)}")

        return cls(
            title=str(data['title']),
            url=str(data['url']),
            description=str(data['description']),
        )


@dataclass(frozen=True)
class BuildSettings:
    """The fully resolved configuration of one build run."""
    input_dir: str
    output_dir: str
    template_file: str
    post_dir: Optional[str] = None
    post_template_file: Optional[str] = None
    list_template_file: Optional[str] = None
    style_file: Optional[str] = None
    assets_dir: Optional[str] = None
    directory_per_page: bool = False
    minify: bool = False
    verbose: bool = False
    feed: bool = False
    config_file: Optional[str] = None
    log_dir: Optional[str] = None

    @classmethod
    def from_args(cls, args_dict: Dict[str, Any]) -> 'BuildSettings':
        """
        Resolve settings from a dictionary of command-line arguments.

        Unknown keys are ignored, None values fall back to the defaults.
        """
        names = cls.__dataclass_fields__.keys()
        values = {k: v for k, v in args_dict.items() if k in names and v is not None}

        # Expand home directory in every path argument
        for key, value in values.items():
            if isinstance(value, str) and value.startswith('~/'):
                values[key] = os.path.expanduser(value)

        return cls(**values)

    @property
    def collection_name(self) -> Optional[str]:
        """Base name of the post directory, used as its output subdirectory."""
        if not self.post_dir:
            return None
        return os.path.basename(os.path.normpath(self.post_dir))


def load_site_config(config_path: str) -> SiteConfig:
    """
    Load the site configuration from a YAML or JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        SiteConfig with title, url and description
    """
    file_ext = os.path.splitext(config_path)[1].lower()
    if file_ext not in ('.yml', '.yaml', '.json'):
        raise ConfigError(f"Unsupported config file format: {file_ext or config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if file_ext == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except PermissionError as e:
        raise ConfigError(f"Permission denied reading configuration file: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}") from e
    except (IOError, OSError) as e:
        raise ConfigError(f"Error reading configuration file {config_path}: {e}") from e

    return SiteConfig.from_mapping(data or {}, source=config_path)
