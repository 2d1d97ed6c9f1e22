import argparse
import difflib
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class Config:
    """Configuration for the E2E test runner."""

    function_name: str
    description: str = "E2E Test Run"
    invocations: int = 3
    aws_region: Optional[str] = None
    report_file: Optional[str] = None
    verbose: bool = False
    raw_config: Dict[str, Any] = field(default_factory=dict, repr=False)


def _missing_config_message(path: str) -> str:
    config_dir = os.path.dirname(path) or "./configs"
    if not os.path.exists(config_dir):
        return (
            f"Error: Configuration file '{path}' not found and config directory "
            f"'{config_dir}' does not exist."
        )

    available_configs = sorted(f for f in os.listdir(config_dir) if f.endswith(".json"))
    error_msg = f"Error: Configuration file '{path}' not found.\n"
    if not available_configs:
        error_msg += f"\nNo configuration files found in {config_dir}/"
    else:
        error_msg += f"\nAvailable configuration files in {config_dir}:\n"
        close_matches = difflib.get_close_matches(
            os.path.basename(path), available_configs, n=3, cutoff=0.6
        )
        for config_file in available_configs:
            if config_file in close_matches:
                error_msg += f"  - {config_file}  ← Did you mean this one?\n"
            else:
                error_msg += f"  - {config_file}\n"
    return error_msg + "\nPlease check the filename and try again."


def load_configuration(args: argparse.Namespace) -> Config:
    """Loads configuration from file and overrides with CLI arguments."""
    config_data: Dict[str, Any] = {}
    if args.config:
        try:
            with open(args.config) as f:
                config_data = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(_missing_config_message(args.config))

    description = config_data.pop("description", "E2E Test Run")
    cli_args = {
        key: value
        for key, value in vars(args).items()
        if value is not None and key != "config"
    }
    config_data.update(cli_args)
    raw_config = config_data.copy()
    config_data["description"] = description

    if not config_data.get("function_name"):
        raise ValueError("The --function-name is required.")
    if int(config_data.get("invocations", 1)) <= 0:
        raise ValueError("--invocations must be a positive integer.")

    return Config(raw_config=raw_config, **config_data)
