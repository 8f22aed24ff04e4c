"""Loading and validation of the mkdocs navigation config.

Only the keys that shape the published tree are read: ``nav``, ``repo_url``,
``site_name`` and ``docs_dir``. Everything else in ``mkdocs.yml`` is ignored.
"""

import posixpath
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .errors import ConfigError, FilesystemError
from .models import MkDocsConfig

MKDOCS_YML = 'mkdocs.yml'


class _PermissiveLoader(yaml.SafeLoader):
    """SafeLoader that tolerates mkdocs-specific tags such as ``!!python/name``."""


def _ignore_unknown_tag(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> Any:
    if isinstance(node, yaml.ScalarNode):
        return loader.construct_scalar(node)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node)
    return loader.construct_mapping(node)


_PermissiveLoader.add_multi_constructor('!', _ignore_unknown_tag)
_PermissiveLoader.add_multi_constructor('tag:yaml.org,2002:python/', _ignore_unknown_tag)


class MkDocsConfigLoader:
    """Reads ``mkdocs.yml`` and validates the fields the publisher relies on.

    Example mkdocs.yml:
        site_name: My Project
        repo_url: https://github.com/acme/my-project
        nav:
          - Home: index.md
          - Guides:
              - Intro: guides/intro.md
    """

    DEFAULT_DOCS_DIR = 'docs'

    @classmethod
    def load(cls, base_path: Union[str, Path] = '.', file_name: str = MKDOCS_YML) -> MkDocsConfig:
        """Load and validate the mkdocs config under ``base_path``.

        Raises:
            FilesystemError: If the file cannot be read
            ConfigError: If the YAML is malformed or a required field is missing
        """
        config_path = Path(base_path) / file_name
        try:
            content = config_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            raise FilesystemError(str(config_path), 'read', 'Configuration file not found')
        except PermissionError:
            raise FilesystemError(str(config_path), 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(str(config_path), 'read', str(e))

        try:
            config_dict = yaml.load(content, Loader=_PermissiveLoader)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {file_name}: {str(e)}")

        if not isinstance(config_dict, dict):
            raise ConfigError(f"{file_name} must be a YAML dictionary")

        return cls._parse_config(config_dict, file_name)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any], file_name: str) -> MkDocsConfig:
        nav = config_dict.get('nav')
        if not isinstance(nav, list):
            raise ConfigError(f"nav is missing from your {file_name} file", 'nav')

        repo_url = config_dict.get('repo_url')
        if not isinstance(repo_url, str) or not repo_url.strip():
            raise ConfigError(f"repo_url is missing from your {file_name} file", 'repo_url')
        repo_url = repo_url.strip()

        site_name = config_dict.get('site_name')
        if site_name is None:
            site_name = posixpath.basename(repo_url.rstrip('/'))
        if not isinstance(site_name, str) or not site_name.strip():
            raise ConfigError("site_name must be a non-empty string", 'site_name')

        docs_dir = config_dict.get('docs_dir', cls.DEFAULT_DOCS_DIR)
        if not isinstance(docs_dir, str) or not docs_dir.strip():
            raise ConfigError("docs_dir must be a non-empty string", 'docs_dir')

        return MkDocsConfig(
            nav=nav,
            repo_url=repo_url,
            site_name=site_name.strip(),
            docs_dir=docs_dir.strip(),
        )
