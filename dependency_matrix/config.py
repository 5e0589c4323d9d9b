"""YAML configuration for the dependency-matrix builder."""

import os

import yaml

DEFAULT_CONFIG = {
    "header_row": 1,
    "data_start_row": 2,
    "output_sheet_name": "Matrix",
    "skip_prefixes": ["_", "v", "V"],
    "edge_marker": "X",
    "label_column_width": 36,
    "autosize_columns": 30,
    "log_level": "INFO",
}


def load_config(config_path=None):
    """Load configuration from a YAML file, merged over the defaults."""
    config = dict(DEFAULT_CONFIG)
    config["skip_prefixes"] = list(DEFAULT_CONFIG["skip_prefixes"])
    if config_path and os.path.exists(config_path):
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f) or {}
        config.update(user_config)
    return config
