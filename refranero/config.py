"""
Run configuration for refranero.

A single immutable :class:`Config` is built once by the CLI and handed to
whichever mode runs.  Site constants (URLs, alphabet, section labels) live
here as module constants; an optional YAML file can override the site
settings for mirrors or test servers.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from typing import Dict, Optional

import yaml  # type: ignore

# Idioms only start with these letters (see listado.aspx on the site).
LETTERS = "ABCDEFGHIJLMNOPQRSTUVYZ"

BASE_URL = "http://cvc.cervantes.es/lengua/refranero"
LISTING_URL = "http://cvc.cervantes.es/lengua/refranero/listado.aspx?letra="

NETWORK_CONNS = 10

SECTION_IDIOM = "Enunciado:"
SECTION_USAGE = "Marcador de uso:"
SECTION_DEFINITION = "Significado:"

USAGE_COMMENT = "Comentario al marcador de uso"

MISSING_MARKER = ""

# Keys a YAML file may set.
_FILE_KEYS = ("base_url", "listing_url", "workers", "timeout", "letters")


class ConfigError(ValueError):
    """Raised for an invalid or contradictory configuration."""


@dataclass(frozen=True)
class Config:
    print_slugs: bool = False
    read_slugs: bool = False
    workers: int = NETWORK_CONNS
    timeout: Optional[float] = None
    keep_going: bool = False
    base_url: str = BASE_URL
    listing_url: str = LISTING_URL
    letters: str = LETTERS
    idiom_label: str = SECTION_IDIOM
    usage_label: str = SECTION_USAGE
    definition_label: str = SECTION_DEFINITION
    usage_comment: str = USAGE_COMMENT

    def validate(self) -> "Config":
        if self.print_slugs and self.read_slugs:
            raise ConfigError("Both --print-slugs and --read-slugs cannot be passed.")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        return self

    def detail_url(self, slug: str) -> str:
        return f"{self.base_url}/{slug}"

    def listing_page_url(self, letter: str) -> str:
        return f"{self.listing_url}{letter}"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        """Build the run configuration from parsed CLI arguments.

        Values from ``args.config`` (a YAML file) are applied first and
        explicit command line flags override them.
        """
        overrides: Dict[str, object] = {}
        if getattr(args, "config", None):
            overrides.update(load_config_file(args.config))
        if getattr(args, "workers", None) is not None:
            overrides["workers"] = args.workers
        if getattr(args, "timeout", None) is not None:
            overrides["timeout"] = args.timeout
        config = replace(
            cls(),
            print_slugs=bool(getattr(args, "print_slugs", False)),
            read_slugs=bool(getattr(args, "read_slugs", False)),
            keep_going=bool(getattr(args, "keep_going", False)),
            **overrides,
        )
        return config.validate()


def load_config_file(path: str) -> Dict[str, object]:
    """Read site overrides from a YAML mapping.

    Only the keys in ``_FILE_KEYS`` are accepted; anything else is a
    :class:`ConfigError` so typos do not pass silently.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    unknown = sorted(set(data) - set(_FILE_KEYS))
    if unknown:
        raise ConfigError(f"{path}: unknown keys {', '.join(unknown)}")
    return dict(data)
