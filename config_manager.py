#!/usr/bin/env python3
"""
Configuration Manager for the quote converter using Pydantic models.
Manages the parser's sheet conventions and the upload transport limits.
"""

import json
import os
from typing import Optional, Union
from pathlib import Path
import logging

from pydantic import ValidationError

from models.config_models import (
    AppConfigs,
    ConfigSection,
    ConfigUpdateRequest,
    ParserConfig,
    UploadConfig
)

CONFIG_FILE_NAME = 'converter_config.json'


class ConfigManager:
    """Manages converter configuration using Pydantic models"""

    def __init__(self, config_file_path: Optional[str] = None):
        self.logger = logging.getLogger(self.__class__.__name__)

        # Default config file location
        if config_file_path is None:
            self.config_dir = Path(os.getenv('QUOTE_CONFIG_DIR', Path.home() / '.quote_converter'))
            os.makedirs(self.config_dir, exist_ok=True)
            self.config_file = self.config_dir / CONFIG_FILE_NAME
        else:
            self.config_file = Path(config_file_path)

        self.config = self._load_config()

    def _load_config(self) -> AppConfigs:
        """Load configuration from file, create default if doesn't exist"""
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    config_data = json.load(f)
                config = AppConfigs(**config_data)
                self.logger.info(f"Loaded configuration from {self.config_file}")
                return config
        except (OSError, ValueError, ValidationError) as e:
            self.logger.error(f"Error loading config file: {e}")

        # Return default config and save it
        default_config = AppConfigs.get_default_config()
        self._save_config(default_config)
        self.logger.info("Created default configuration")
        return default_config

    def _save_config(self, config: AppConfigs) -> None:
        """Save configuration to file"""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(config.model_dump(), f, indent=2, ensure_ascii=False)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except OSError as e:
            self.logger.error(f"Error saving config file: {e}")
            raise

    def get_section_config(self, section: ConfigSection) -> Union[ParserConfig, UploadConfig]:
        """Get configuration for a specific section"""
        return getattr(self.config, section.value)

    def get_all_configs(self) -> AppConfigs:
        """Get all configurations"""
        return self.config

    @property
    def parser_config(self) -> ParserConfig:
        return self.config.parser

    @property
    def upload_config(self) -> UploadConfig:
        return self.config.upload

    def update_config(self, update_request: ConfigUpdateRequest) -> bool:
        """Update configuration based on request; unknown fields are rejected"""
        section = update_request.section.value
        current_config = getattr(self.config, section)

        unknown = [name for name in update_request.values if name not in type(current_config).model_fields]
        if unknown:
            self.logger.error(f"Unknown {section} settings: {unknown}")
            return False

        try:
            merged = {**current_config.model_dump(), **update_request.values}
            updated = type(current_config)(**merged)
        except ValidationError as e:
            self.logger.error(f"Invalid {section} settings: {e}")
            return False

        self.config = self.config.model_copy(update={section: updated})
        self._save_config(self.config)
        self.logger.info(f"Configuration updated successfully for {section}")
        return True

    def reset_to_defaults(self) -> bool:
        """Reset configuration to defaults"""
        try:
            self.config = AppConfigs.get_default_config()
            self._save_config(self.config)
            self.logger.info("Configuration reset to defaults")
            return True
        except OSError as e:
            self.logger.error(f"Error resetting config to defaults: {e}")
            return False

    def get_config_summary(self) -> dict:
        """Get a summary of current configuration for display"""
        return {section.value: self.get_section_config(section).model_dump() for section in ConfigSection}
