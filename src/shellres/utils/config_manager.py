"""
Configuration management module for shellres.

This module provides functionality for loading, validating, and managing
configuration settings for a residence time analysis. The flat
`AnalysisConfig` is what every component receives at construction time;
`ConfigManager` handles the grouped YAML representation.
"""
import yaml
import copy
from dataclasses import dataclass, asdict
from pathlib import Path
import logging
from typing import Dict, Any, Optional, Union

from .helpers import update_dict_recursively

logger = logging.getLogger(__name__)

DEFAULT_BOX_MARKER = "30.000000   30.000000   30.000000"

@dataclass
class AnalysisConfig:
    shell_dist: float = 3.6
    frame_time: float = 2e-12
    bin_width: float = 6e-12
    input_path: str = "liquid-e100-v100.arc"
    output_path: str = "bins.txt"
    log_path: str = "log.txt"
    center_atom_id: int = 1
    shell_element: str = "O"
    box_marker: str = DEFAULT_BOX_MARKER
    flush_open_on_eof: bool = False  # False drops residences still open at end of stream
    strict_parsing: bool = False
    summary_path: Optional[str] = None
    plot_path: Optional[str] = None
    show_progress: bool = True

    def __post_init__(self):
        if self.shell_dist <= 0:
            raise ValueError(f"shell_dist must be positive, got {self.shell_dist}")
        if self.frame_time <= 0:
            raise ValueError(f"frame_time must be positive, got {self.frame_time}")
        if self.bin_width <= 0:
            raise ValueError(f"bin_width must be positive, got {self.bin_width}")
        for name in ('input_path', 'output_path', 'log_path'):
            if not getattr(self, name):
                raise ValueError(f"{name} must be a non-empty path")
        if not self.shell_element:
            raise ValueError("shell_element must be a non-empty element symbol")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# Grouped layout used in YAML files; each leaf maps onto an AnalysisConfig field.
CONFIG_SECTIONS = {
    'trajectory': ['input_path', 'center_atom_id', 'shell_element', 'box_marker', 'strict_parsing'],
    'analysis': ['shell_dist', 'frame_time', 'bin_width', 'flush_open_on_eof'],
    'output': ['output_path', 'log_path', 'summary_path', 'plot_path', 'show_progress'],
}

def default_config_dict() -> Dict[str, Any]:
    defaults = AnalysisConfig().to_dict()
    return {section: {key: defaults[key] for key in keys} for section, keys in CONFIG_SECTIONS.items()}

class ConfigManager:
    """Class for managing shellres configuration settings."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager with default settings.

        Args:
            config_file: Path to a YAML configuration file (optional)
        """
        self.config: Dict[str, Any] = default_config_dict()
        if config_file is not None:
            self.load_config(config_file)

    def load_config(self, config_file: Union[str, Path]) -> None:
        """
        Load configuration from a YAML file and merge it over the defaults.

        Args:
            config_file: Path to the configuration file
        """
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        logger.info(f"Loading configuration from {config_path}")
        with open(config_path, 'r') as f:
            user_cfg = yaml.safe_load(f)

        if user_cfg is None:
            logger.warning(f"Configuration file {config_path} is empty. Using defaults.")
            return
        if not isinstance(user_cfg, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping at top level")

        update_dict_recursively(self.config, user_cfg)
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate section and key names, then the values themselves."""
        for section, values in self.config.items():
            if section not in CONFIG_SECTIONS:
                raise ValueError(f"Unknown configuration section: {section}")
            if not isinstance(values, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")
            for key in values:
                if key not in CONFIG_SECTIONS[section]:
                    raise ValueError(f"Unknown setting '{key}' in section '{section}'")
        # AnalysisConfig.__post_init__ checks the values
        try:
            self.to_analysis_config()
        except TypeError as e:
            raise ValueError(f"Invalid configuration value: {e}") from e

    def update_config(self, updates: Dict[str, Any]) -> None:
        """
        Update configuration settings.

        Args:
            updates: Dictionary of configuration updates (grouped like the YAML file)
        """
        update_dict_recursively(self.config, updates)
        self._validate_config()

    def set_value(self, key: str, value: Any) -> None:
        """
        Set a single setting by its flat name, e.g. 'shell_dist'.

        Args:
            key: AnalysisConfig field name
            value: New value
        """
        for section, keys in CONFIG_SECTIONS.items():
            if key in keys:
                self.update_config({section: {key: value}})
                return
        raise ValueError(f"Unknown setting: {key}")

    def to_analysis_config(self) -> AnalysisConfig:
        """
        Flatten the grouped settings into an AnalysisConfig.

        Returns:
            AnalysisConfig instance
        """
        flat: Dict[str, Any] = {}
        for values in self.config.values():
            flat.update(values)
        return AnalysisConfig(**flat)

    def save_config(self, output_file: Union[str, Path]) -> None:
        """
        Save current configuration to a file.

        Args:
            output_file: Path to save the configuration to
        """
        output_path = Path(output_file)
        logger.info(f"Saving configuration to {output_path}")

        with open(output_path, 'w') as f:
            yaml.dump(self.config, f, default_flow_style=False)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.config)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ConfigManager':
        """
        Create a ConfigManager instance from a grouped dictionary.

        Args:
            config_dict: Dictionary of configuration settings

        Returns:
            ConfigManager instance
        """
        instance = cls()
        instance.update_config(config_dict)
        return instance
