"""
Configuration loading for Wordchain.

A configuration view is composed from YAML files in precedence order, then dotted ``key=value``
overrides are applied, and the result is validated as a :class:`ChainConfiguration`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, MutableMapping, Optional

import yaml

from .models import ChainConfiguration


def _parse_scalar(value: str) -> object:
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered in {"null", "none"}:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def parse_override_value(raw: str) -> object:
    """
    Parse an override string into a Python value.

    :param raw: Raw override text.
    :type raw: str
    :return: Parsed value.
    :rtype: object
    """
    stripped = str(raw).strip()
    if not stripped:
        return ""
    if stripped[0] in {"{", "["}:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return stripped
    return _parse_scalar(stripped)


def parse_dotted_overrides(pairs: Optional[Iterable[str]]) -> Dict[str, object]:
    """
    Parse repeated key=value pairs into a dotted override mapping.

    :param pairs: Repeated override pairs.
    :type pairs: Iterable[str] or None
    :return: Override mapping.
    :rtype: dict[str, object]
    :raises ValueError: If a pair is not key=value or the key is empty.
    """
    overrides: Dict[str, object] = {}
    for item in pairs or []:
        if "=" not in item:
            raise ValueError(f"Overrides must be key=value (got {item!r})")
        key, raw = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override keys must be non-empty")
        overrides[key] = parse_override_value(raw)
    return overrides


def _set_dotted_key(target: MutableMapping[str, object], dotted_key: str, value: object) -> None:
    parts = [part.strip() for part in dotted_key.split(".") if part.strip()]
    if not parts:
        raise ValueError("Override keys must be non-empty")
    current: MutableMapping[str, object] = target
    for part in parts[:-1]:
        existing = current.get(part)
        if not isinstance(existing, dict):
            existing = {}
            current[part] = existing
        current = existing
    current[parts[-1]] = value


def apply_dotted_overrides(
    config: Mapping[str, object], overrides: Mapping[str, object]
) -> Dict[str, object]:
    """
    Apply dotted key overrides to a configuration mapping.

    :param config: Base configuration mapping.
    :type config: Mapping[str, object]
    :param overrides: Dotted key override mapping.
    :type overrides: Mapping[str, object]
    :return: New configuration mapping with overrides applied.
    :rtype: dict[str, object]
    """
    updated: Dict[str, object] = json.loads(json.dumps(dict(config)))
    for key, value in overrides.items():
        _set_dotted_key(updated, key, value)
    return updated


def _deep_merge(base: MutableMapping[str, object], incoming: Mapping[str, object]) -> None:
    for key, value in incoming.items():
        existing = base.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            _deep_merge(existing, value)
        else:
            base[key] = value


def load_configuration_view(
    configuration_paths: Iterable[str],
    *,
    configuration_label: str = "Configuration file",
) -> Dict[str, object]:
    """
    Load a composed configuration view from YAML files, later files taking precedence.

    :param configuration_paths: Configuration file paths in precedence order.
    :type configuration_paths: Iterable[str]
    :param configuration_label: Label used in error messages.
    :type configuration_label: str
    :return: Composed configuration view.
    :rtype: dict[str, object]
    :raises FileNotFoundError: If a configuration file is missing.
    :raises ValueError: If a configuration file is not a mapping.
    """
    view: Dict[str, object] = {}
    paths: List[Path] = [Path(str(raw)) for raw in configuration_paths]
    for candidate in paths:
        if not candidate.is_file():
            raise FileNotFoundError(f"{configuration_label} not found: {candidate}")
        loaded = yaml.safe_load(candidate.read_text(encoding="utf-8"))
        if loaded is None:
            continue
        if not isinstance(loaded, dict):
            raise ValueError(f"{configuration_label} must be a mapping/object: {candidate}")
        _deep_merge(view, loaded)
    return view


def resolve_chain_configuration(
    configuration_paths: Optional[Iterable[str]] = None,
    *,
    override_pairs: Optional[Iterable[str]] = None,
    explicit: Optional[Mapping[str, object]] = None,
) -> ChainConfiguration:
    """
    Compose files, overrides and explicit values into a validated chain configuration.

    :param configuration_paths: Optional YAML configuration paths.
    :type configuration_paths: Iterable[str] or None
    :param override_pairs: Optional dotted key=value overrides.
    :type override_pairs: Iterable[str] or None
    :param explicit: Values that win over everything else; None values are ignored.
    :type explicit: Mapping[str, object] or None
    :return: Validated configuration.
    :rtype: ChainConfiguration
    :raises pydantic.ValidationError: If the composed view is not a valid configuration.
    """
    view = load_configuration_view(configuration_paths or [])
    view = apply_dotted_overrides(view, parse_dotted_overrides(override_pairs))
    for key, value in (explicit or {}).items():
        if value is not None:
            view[key] = value
    return ChainConfiguration.model_validate(view)
