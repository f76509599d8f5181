"""Load piishield.yaml into a ``PIIShieldConfig``.

Every problem found in the file is reported with its location in the
document (``extra_fields[1].category``), so one run shows all of them.
Beyond the schema, extra field rules that can never fire, because a
builtin rule already claims every key they would match, are rejected.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from piishield.config.schema import PIIShieldConfig
from piishield.sanitize.rules import CLASSIFICATION_RULES, shadowing_rule
from piishield.sanitize.values import child_path, index_path


class ConfigValidationError(Exception):
    """Raised when a config file cannot be turned into a ``PIIShieldConfig``.

    Attributes:
        path: The config file.
        details: One dict per problem with ``type``, ``loc`` and ``msg``.
    """

    def __init__(self, path: Path, details: list[dict[str, Any]], message: str | None = None) -> None:
        self.path = path
        self.details = details
        super().__init__(message or _describe(path, details))


def _describe(path: Path, details: list[dict[str, Any]]) -> str:
    lines = [f"Invalid piishield config {path}:"]
    for problem in details:
        lines.append(f"  - {problem['loc'] or '<document>'}: {problem['msg']}")
    return "\n".join(lines)


def _location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location the way detector paths look."""
    path = ""
    for part in loc:
        path = index_path(path, part) if isinstance(part, int) else child_path(path, part)
    return path


def _problem(kind: str, loc: str, msg: str) -> dict[str, Any]:
    return {"type": kind, "loc": loc, "msg": msg}


def _read_document(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigValidationError(
            path,
            [_problem("yaml_parse_error", "", str(e))],
            message=f"Failed to parse YAML in {path}: {e}",
        ) from e

    if data is None:
        raise ConfigValidationError(
            path, [_problem("empty_file", "", 'file is empty; start it with version: "1.0"')],
        )
    if not isinstance(data, dict):
        raise ConfigValidationError(
            path,
            [_problem("not_a_mapping", "", f"expected a mapping of settings, got a {type(data).__name__}")],
        )
    return data


def _shadowed_extras(config: PIIShieldConfig) -> list[dict[str, Any]]:
    problems = []
    for i, spec in enumerate(config.extra_fields):
        builtin = shadowing_rule(spec.to_rule(), CLASSIFICATION_RULES)
        if builtin is not None:
            problems.append(_problem(
                "shadowed_rule",
                child_path(index_path("extra_fields", i), "pattern"),
                f"'{spec.pattern}' never matches: builtin rule '{builtin.pattern}' "
                f"({builtin.category.value}) already covers it",
            ))
    return problems


def load_config(path: Path) -> PIIShieldConfig:
    """Load and validate a piishield config file.

    Args:
        path: Path to a piishield.yaml file.

    Returns:
        The validated config.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigValidationError: If the YAML is malformed, fails schema
            validation, or declares extra field rules that can never match.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found at {path}. Omit --config to use the builtin rules."
        )

    data = _read_document(path)
    try:
        config = PIIShieldConfig.model_validate(data)
    except ValidationError as e:
        problems = [_problem(err["type"], _location(err["loc"]), err["msg"]) for err in e.errors()]
        raise ConfigValidationError(path, problems) from e

    shadowed = _shadowed_extras(config)
    if shadowed:
        raise ConfigValidationError(path, shadowed)
    return config
