"""Publish configuration loading and validation.

Settings come from a YAML file next to mkdocs.yml; command-line options
override the file. The file is optional as long as the space is given on
the command line.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from src.docs_tree.errors import ConfigError, FilesystemError
from .errors import ConfigNotFoundError
from .models import DEFAULT_MKDOCS_FILE, PublishConfig


class PublishConfigLoader:
    """Loads and validates the publish configuration.

    Configuration file structure:
        space_key: DOCS
        parent_page: Engineering
        title_prefix: "[ACME]"
        max_workers: 4
        mkdocs_file: mkdocs.yml
        cascade_delete: true
    """

    REQUIRED_FIELDS = {'space_key'}

    DEFAULTS = {
        'parent_page': None,
        'title_prefix': '',
        'max_workers': 1,
        'mkdocs_file': DEFAULT_MKDOCS_FILE,
        'cascade_delete': True,
    }

    @classmethod
    def load(
        cls,
        config_path: Union[str, Path],
        overrides: Optional[Dict[str, Any]] = None,
        required: bool = False,
    ) -> PublishConfig:
        """Load the configuration file and apply command-line overrides.

        Args:
            config_path: Path to the YAML configuration file
            overrides: Values from the command line; None values are ignored
            required: Fail when the file is missing, even if overrides suffice

        Raises:
            ConfigNotFoundError: If the file is missing and cannot be done without
            FilesystemError: If the file exists but cannot be read
            ConfigError: If a field is missing or invalid
        """
        overrides = {key: value for key, value in (overrides or {}).items() if value is not None}
        config_path = Path(config_path)

        if config_path.exists():
            config_dict = cls._read(config_path)
        elif required or 'space_key' not in overrides:
            raise ConfigNotFoundError(str(config_path))
        else:
            config_dict = {}

        config_dict.update(overrides)
        return cls._parse_config(config_dict)

    @classmethod
    def _read(cls, config_path: Path) -> Dict[str, Any]:
        try:
            content = config_path.read_text(encoding='utf-8')
        except PermissionError:
            raise FilesystemError(str(config_path), 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(str(config_path), 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return {}
        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Config must be a YAML dictionary, got {type(config_dict).__name__}"
            )
        return config_dict

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> PublishConfig:
        for field_name in cls.REQUIRED_FIELDS:
            if field_name not in config_dict:
                raise ConfigError(f"Missing required field '{field_name}'", field_name)

        space_key = config_dict['space_key']
        if not isinstance(space_key, str) or not space_key.strip():
            raise ConfigError("Field 'space_key' must be a non-empty string", 'space_key')

        values = {**cls.DEFAULTS, **config_dict}

        parent_page = values['parent_page']
        if parent_page is not None and (not isinstance(parent_page, str) or not parent_page.strip()):
            raise ConfigError("Field 'parent_page' must be a non-empty string", 'parent_page')

        title_prefix = values['title_prefix']
        if not isinstance(title_prefix, str):
            raise ConfigError(
                f"Field 'title_prefix' must be a string, got {type(title_prefix).__name__}",
                'title_prefix'
            )

        max_workers = values['max_workers']
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            raise ConfigError("Field 'max_workers' must be an integer >= 1", 'max_workers')

        mkdocs_file = values['mkdocs_file']
        if not isinstance(mkdocs_file, str) or not mkdocs_file.strip():
            raise ConfigError("Field 'mkdocs_file' must be a non-empty string", 'mkdocs_file')

        cascade_delete = values['cascade_delete']
        if not isinstance(cascade_delete, bool):
            raise ConfigError(
                f"Field 'cascade_delete' must be a boolean, got {type(cascade_delete).__name__}",
                'cascade_delete'
            )

        return PublishConfig(
            space_key=space_key.strip(),
            parent_page=parent_page.strip() if parent_page else None,
            title_prefix=title_prefix.strip(),
            max_workers=max_workers,
            mkdocs_file=mkdocs_file.strip(),
            cascade_delete=cascade_delete,
        )
