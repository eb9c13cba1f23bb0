"""
YAML configuration parser for lcd.

This module loads the optional YAML configuration file, validates it into an
LcdConfig and reports helpful errors. Without a configuration file lcd runs
on defaults: snapshot at ~/.lcd-tree.txt, home directory as scan root and
$SHELL as the shell.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass
from pydantic import ValidationError

from ..models.config import LcdConfig, DEFAULT_SNAPSHOT_FILENAME


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: LcdConfig
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    Configuration files are looked up in the home directory and in the XDG
    configuration directory. The first file found wins.
    """

    DEFAULT_CONFIG_NAMES = [
        '.lcd.yaml',
        '.lcd.yml',
        '.config/lcd/config.yaml',
        '.config/lcd/config.yml'
    ]

    def __init__(self, home_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration parser.

        Args:
            home_dir: Directory searched for configuration files (defaults to the user's home)
        """
        self.home_dir = Path(home_dir) if home_dir else Path.home()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path).expanduser()
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")

            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None
            if is_default:
                config_data = {}

        merged_config = self._get_default_config()
        merged_config.update(config_data)

        config = self._validate_config_data(merged_config)

        self.logger.info(f"Configuration loaded from {config_path or 'defaults'}")

        return ConfigParseResult(
            config=config,
            config_path=config_path,
            is_default=is_default
        )

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        for config_name in self.DEFAULT_CONFIG_NAMES:
            config_file = self.home_dir / config_name
            if config_file.exists() and config_file.is_file():
                config_data = self._load_yaml_file(config_file)
                self.logger.info(f"Found configuration file: {config_file}")
                return config_file, config_data

        self.logger.debug("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _validate_config_data(self, config_data: Dict[str, Any]) -> LcdConfig:
        """
        Validate configuration data and build the LcdConfig.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return LcdConfig.from_dict(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration when no config file is found.

        Returns:
            Default configuration dictionary
        """
        return {
            'home_dir': str(self.home_dir),
            'snapshot_filename': DEFAULT_SNAPSHOT_FILENAME
        }

    def _generate_yaml_with_comments(self, config_dict: Dict[str, Any]) -> str:
        """
        Generate YAML content with helpful comments.

        Args:
            config_dict: Configuration dictionary

        Returns:
            YAML content with comments
        """
        lines = [
            "# lcd configuration",
            "# Controls where the directory snapshot lives and what is scanned by default",
            "",
        ]

        sections = [
            ("snapshot_filename", "Snapshot file name inside the home directory"),
            ("snapshot_path", "Explicit snapshot location (overrides snapshot_filename)"),
            ("default_root", "Directory scanned when no root is stored or given (defaults to home)"),
            ("shell", "Shell started when entering a directory (defaults to $SHELL)"),
            ("clipboard_commands", "Clipboard commands tried in order on Linux")
        ]

        for section_name, comment in sections:
            if section_name in config_dict:
                lines.append(f"# {comment}")
                section_yaml = yaml.dump({section_name: config_dict[section_name]},
                                         default_flow_style=False,
                                         sort_keys=False)
                lines.append(section_yaml.rstrip())
                lines.append("")

        return "\n".join(lines)

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without using it.

        Args:
            config_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        try:
            self.load_config(config_path)
        except ConfigurationError as e:
            return [str(e)]
        return []

    def get_config_template(self) -> str:
        """
        Get a template configuration file with all options and comments.

        Returns:
            YAML template as string
        """
        template_config = {
            'snapshot_filename': DEFAULT_SNAPSHOT_FILENAME,
            'snapshot_path': None,
            'default_root': '~/Projects',
            'shell': '/bin/bash',
            'clipboard_commands': [
                ['xclip', '-selection', 'clipboard'],
                ['wl-copy']
            ]
        }

        return self._generate_yaml_with_comments(template_config)


def load_config(config_path: Optional[Union[str, Path]] = None,
                home_dir: Optional[Union[str, Path]] = None) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (optional)
        home_dir: Home directory override (optional)

    Returns:
        ConfigParseResult containing parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(home_dir=home_dir)
    return parser.load_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """
    Convenience function to validate a configuration file.

    Args:
        config_path: Path to configuration file

    Returns:
        List of validation errors (empty if valid)
    """
    parser = ConfigParser()
    return parser.validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Args:
        output_path: Where to save the template

    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
