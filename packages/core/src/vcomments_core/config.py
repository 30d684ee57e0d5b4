import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "create_single_file_comments": True,
    "create_comment_with_all_single_file_comments": False,
    "keep_old_comments": False,
    "comment_only_changed_content": True,  # False = any line of a changed file may be commented
    "max_comment_size": 65535,  # GitHub rejects comment bodies longer than this
    "comment_template": None,  # None = use built-in default; set to a path string to override
}


def load_config(config_path: str = ".vcomments.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .vcomments.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def load_comment_template(config: dict) -> Optional[str]:
    """
    Load the custom comment template, if one is configured.

    Returns None when ``comment_template`` is unset so the renderer falls back
    to its built-in default.
    """
    custom_path = config.get("comment_template")
    if not custom_path:
        return None
    p = Path(custom_path)
    if not p.exists():
        raise FileNotFoundError(f"Comment template file not found: {custom_path}")
    return p.read_text()
