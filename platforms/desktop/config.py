"""
Configuration manager for the desktop dead reckoning application.
"""

import copy
import json
import logging
import os
from typing import Dict, Any

logger = logging.getLogger(__name__)

class Config:
    """Configuration manager for the dead reckoning application."""

    DEFAULT_CONFIG = {
        # Sensor service
        "sensor_update_interval_ms": 50,

        # Dead reckoning parameters
        "velocity_damping": 0.98,
        "min_path_step_m": 0.005,

        # Visual-inertial comparison trail
        "slam": {
            "enabled": True,
            "poll_interval_s": 0.1,
            "move_threshold_m": 0.01,
            "max_points": 400,
            "noise_std": 0.01,
            "failure_rate": 0.05
        },

        # Simulated sensor motion and noise
        "simulation": {
            "surge_amplitude": 0.3,
            "surge_period_s": 4.0,
            "turn_rate": 0.1,
            "accel_offset": [0.05, -0.03, 0.0],
            "accel_noise_std": 0.02,
            "gyro_noise_std": 0.002,
            "seed": None
        },

        # Logging
        "enable_logging": False,
        "log_file": "navx_dr.log",
        "log_level": "INFO",

        # Output configuration
        "output_rate_hz": 1.0
    }

    def __init__(self, config_file: str = "config.json", create_missing: bool = True):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file
            create_missing: Write the defaults if the file does not exist
        """
        self.config_file = config_file
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        # Load configuration from file if it exists
        if os.path.exists(config_file):
            self.load_config()
        else:
            logger.info("Config file %s not found, using defaults", config_file)
            if create_missing:
                self.save_config()

    def load_config(self) -> bool:
        """
        Load configuration from file.

        Returns:
            True if loaded successfully
        """
        try:
            with open(self.config_file, 'r') as f:
                file_config = json.load(f)

            # Merge with defaults (file config overrides defaults)
            self._merge_config(self.config, file_config)

            logger.info("Configuration loaded from %s", self.config_file)
            return True

        except (OSError, ValueError) as e:
            logger.warning("Failed to load config: %s", e)
            return False

    def save_config(self) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if saved successfully
        """
        try:
            with open(self.config_file, 'w') as f:
                json.dump(self.config, f, indent=2)

            logger.info("Configuration saved to %s", self.config_file)
            return True

        except (OSError, TypeError) as e:
            logger.warning("Failed to save config: %s", e)
            return False

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default=None):
        """Get configuration value with optional default."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set configuration value."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    # Property accessors for common configuration values
    @property
    def sensor_update_interval_ms(self) -> int:
        return self.config["sensor_update_interval_ms"]

    @property
    def velocity_damping(self) -> float:
        return self.config["velocity_damping"]

    @property
    def min_path_step_m(self) -> float:
        return self.config["min_path_step_m"]

    @property
    def slam(self) -> Dict[str, Any]:
        return self.config["slam"]

    @property
    def simulation(self) -> Dict[str, Any]:
        return self.config["simulation"]

    @property
    def enable_logging(self) -> bool:
        return self.config["enable_logging"]

    @property
    def log_file(self) -> str:
        return self.config["log_file"]

    @property
    def log_level(self) -> str:
        return self.config["log_level"]

    @property
    def output_rate_hz(self) -> float:
        return self.config["output_rate_hz"]

    def setup_logging(self):
        """Configure the root logger from the logging keys."""
        handlers = [logging.StreamHandler()]
        if self.enable_logging:
            handlers.append(logging.FileHandler(self.log_file))

        logging.basicConfig(
            level=getattr(logging, str(self.log_level).upper(), logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            handlers=handlers,
            force=True,
        )

    def print_config(self):
        """Print current configuration."""
        print("=== Dead Reckoning Configuration ===")
        print(json.dumps(self.config, indent=2))
