from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
import yaml
from pathlib import Path

from .cache.mode import ConfigurationError, BASE_ORGANIZATIONS
from .utils.logging import get_logger

logger = get_logger("dmcache.config")

ON_MALFORMED_POLICIES = ("error", "skip")
NUM_MODES = 2 * len(BASE_ORGANIZATIONS)


@dataclass
class SimConfig:
    """Run configuration for the cache controller simulator."""
    # Input trace
    trace_file: str = "test_file.trc"

    # Config file
    config_file: str = ""

    # Results
    output_csv: str = "results.csv"
    csv_header: bool = True
    report_dir: str = ""  # empty: no JSON/HTML report

    # Which modes to simulate (1-based ids)
    modes: List[int] = field(default_factory=lambda: list(range(1, NUM_MODES + 1)))

    # What to do with an access the controller rejects: "error" or "skip"
    on_malformed: str = "error"

    # Per-access debug logging
    debug: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.on_malformed not in ON_MALFORMED_POLICIES:
            raise ConfigurationError(
                f"on_malformed must be one of {ON_MALFORMED_POLICIES}, got {self.on_malformed!r}.")
        for name in ("csv_header", "debug"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false, got {getattr(self, name)!r}.")
        for name in ("trace_file", "output_csv", "report_dir"):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(f"{name} must be a path string, got {getattr(self, name)!r}.")
        if not isinstance(self.modes, list):
            raise ConfigurationError(f"modes must be a list of mode ids, got {self.modes!r}.")
        if not self.modes:
            raise ConfigurationError("At least one cache mode must be selected.")
        for mode_id in self.modes:
            if isinstance(mode_id, bool) or not isinstance(mode_id, int) or not 1 <= mode_id <= NUM_MODES:
                raise ConfigurationError(f"Unknown cache mode {mode_id!r}, expected 1..{NUM_MODES}.")

    def update_from_yaml(self, yaml_path: str):
        """Updates config fields from a YAML file."""
        with open(yaml_path, 'r') as f:
            try:
                yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Cannot parse config file {yaml_path}: {e}") from e
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file {yaml_path} must contain a mapping of settings.")
        for key, value in yaml_config.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.warning("Ignoring unknown config key '%s' in %s", key, yaml_path)

    @classmethod
    def from_args(cls, args) -> SimConfig:
        """Factory method to create a SimConfig from parsed argparse arguments."""
        config = cls()

        # 1. Load from YAML config file if provided
        if hasattr(args, 'config') and args.config:
            config.config_file = args.config
            if Path(config.config_file).exists():
                config.update_from_yaml(config.config_file)
            else:
                logger.warning("Config file %s not found.", config.config_file)

        # 2. Override with command-line arguments
        arg_dict = vars(args)
        for key, value in arg_dict.items():
            if value is not None and hasattr(config, key):
                setattr(config, key, value)

        config.validate()
        return config
