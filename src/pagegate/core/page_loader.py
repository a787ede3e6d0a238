"""YAML page definition loader — PageDefinition model conversion.

Loads page definition YAML files, substitutes variables, validates via Pydantic.
"""

from __future__ import annotations

import os
import re
from pathlib import Path  # noqa: TC003
from typing import Any

import yaml

from pagegate.core.exceptions import PageDefinitionError
from pagegate.core.models import PageDefinition

_VAR_PATTERN = re.compile(r"\{\{(\s*[\w.]+\s*)\}\}")


def load_page_definition(path: Path, variables: dict[str, str] | None = None) -> PageDefinition:
    """Load a single PageDefinition from a YAML file.

    Args:
        path: Path to the page definition YAML file.
        variables: External variables to substitute (e.g. {"base_url": "https://..."}).

    Returns:
        Validated PageDefinition instance.

    Raises:
        PageDefinitionError: If file cannot be read, parsed, or validated.
    """
    data = _load_yaml(path)
    data = _substitute_vars(data, variables or {})
    try:
        return PageDefinition.model_validate(data)
    except Exception as e:
        msg = f"Page definition validation failed ({path.name}): {e}"
        raise PageDefinitionError(msg) from e


def load_page_definitions(
    path: Path, variables: dict[str, str] | None = None
) -> dict[str, PageDefinition]:
    """Load page definitions from a file or directory, keyed by page name.

    Raises:
        PageDefinitionError: If path doesn't exist, nothing loads, or two
            files declare the same page name.
    """
    if not path.exists():
        msg = f"Page definition path does not exist: {path}"
        raise PageDefinitionError(msg)

    if path.is_file():
        files = [path]
    else:
        files = sorted(
            f for f in path.rglob("*") if f.suffix in (".yaml", ".yml") and f.is_file()
        )
    if not files:
        msg = f"No page definition YAML files found in: {path}"
        raise PageDefinitionError(msg)

    pages: dict[str, PageDefinition] = {}
    for file in files:
        page = load_page_definition(file, variables)
        if page.name in pages:
            msg = f"Duplicate page name '{page.name}' in {file.name}"
            raise PageDefinitionError(msg)
        pages[page.name] = page
    return pages


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file."""
    try:
        with open(path, encoding="utf-8") as f:  # noqa: PTH123
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Failed to parse page definition YAML ({path.name}): {e}"
        raise PageDefinitionError(msg) from e
    except OSError as e:
        msg = f"Failed to read page definition ({path.name}): {e}"
        raise PageDefinitionError(msg) from e

    if data is None:
        msg = f"Page definition file is empty: {path.name}"
        raise PageDefinitionError(msg)
    if not isinstance(data, dict):
        msg = f"Page definition file must be a YAML mapping: {path.name}"
        raise PageDefinitionError(msg)
    return data


def _substitute_vars(data: Any, variables: dict[str, str]) -> Any:
    """Recursively substitute {{var}} placeholders in data.

    Supports:
        {{var_name}} — from variables dict or the page's own variables
        {{env.VAR_NAME}} — from environment variables
    """
    if isinstance(data, str):
        return _VAR_PATTERN.sub(lambda m: _resolve_var(m.group(1).strip(), variables), data)
    if isinstance(data, dict):
        # Page-level variables are defaults; external variables win
        merged_vars = {}
        if "variables" in data and isinstance(data["variables"], dict):
            merged_vars.update(data["variables"])
        merged_vars.update(variables)
        return {k: _substitute_vars(v, merged_vars) for k, v in data.items()}
    if isinstance(data, list):
        return [_substitute_vars(item, variables) for item in data]
    return data


def _resolve_var(var_name: str, variables: dict[str, str]) -> str:
    """Resolve a single variable reference."""
    if var_name.startswith("env."):
        env_key = var_name[4:]
        return os.environ.get(env_key, f"{{{{{var_name}}}}}")

    if var_name in variables:
        return str(variables[var_name])

    # Unresolved: keep placeholder
    return f"{{{{{var_name}}}}}"
