"""Config loading: YAML files with ${VAR} expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RBACConfig

CONFIG_ENV = "RBACA_CONFIG"

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_paths(explicit: str | None = None) -> list[Path]:
    """Candidate config files, highest precedence first."""
    candidates = [explicit, os.environ.get(CONFIG_ENV)]
    paths = [Path(c) for c in candidates if c]
    paths.append(Path("./rbaca.yaml"))
    paths.append(Path.home() / ".rbaca" / "config.yaml")
    return paths


def load_config(path: str | None = None) -> RBACConfig:
    """Load the first existing config file, or defaults when there is none.

    Order: *path* > $RBACA_CONFIG > ./rbaca.yaml > ~/.rbaca/config.yaml.
    Empty files are skipped.
    """
    for candidate in config_search_paths(path):
        if not candidate.is_file():
            continue
        try:
            raw = yaml.safe_load(candidate.read_text())
            if raw is None:
                continue
            return RBACConfig.model_validate(_expand_env_vars(raw))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {candidate}: {e}") from e
        except ValidationError as e:
            raise ValueError(f"Invalid config in {candidate}: {e}") from e

    return RBACConfig()


def _expand_env_vars(obj: object) -> object:
    """Replace ${VAR} in every string; unset variables expand to ''."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


DEFAULT_CONFIG_TEMPLATE = """\
# rbaca.yaml

# What to do with attributes no predicate is registered for
attributes:
  missing: "deny"              # deny | skip | raise

# Static rules file (JSON or YAML with `roles` and `users`)
# rules_file: "${RBACA_RULES}"

# Provider classes registered under the `rbaca.providers` entry point group
plugins:
  providers: []
"""
