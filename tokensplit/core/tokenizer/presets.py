"""
Preset loader and registry.

Presets are named tokenizer configurations stored as YAML. Built-in presets
ship with the package; additional directories can be loaded at runtime.

YAML format:
```yaml
id: csv
label: "Comma separated values"
base: default          # optional, options are merged over the base preset
options:
  delimiters: ","
  qualifiers: '"'
  ignore_consecutive_delimiters: false
```
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError
from .models import TokenizerConfig, build_config

logger = logging.getLogger(__name__)

BUILTIN_PRESETS_DIR = Path(__file__).parent.parent.parent / "presets"


class Preset(BaseModel, frozen=True):
    """A named set of tokenizer options."""

    id: str
    label: str
    base: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)
    source: Path | None = None

    model_config = {"frozen": True}


def load_preset_from_yaml(path: Path) -> Preset | None:
    """
    Load a preset from a YAML file.

    Returns:
        The preset, or None if the file is missing or has no id

    Raises:
        ConfigurationError: If the options block or a preset field is malformed
        yaml.YAMLError: If the file is not valid YAML
    """
    if not path.exists():
        return None

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or not data.get("id"):
        return None

    options = data.get("options") or {}
    if not isinstance(options, dict) or not all(isinstance(key, str) for key in options):
        raise ConfigurationError(f"options must be a mapping of option names in {path}", option="options")

    # Fail fast on unknown or invalid options
    build_config(**options)

    try:
        return Preset(
            id=str(data["id"]),
            label=data.get("label", str(data["id"])),
            base=data.get("base"),
            options=options,
            source=path,
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ConfigurationError(f"{first['msg']} in {path}", option=field) from None


def load_presets_from_directory(directory: Path) -> list[Preset]:
    """Load all presets from a directory, skipping invalid files."""
    presets: list[Preset] = []

    if not directory.exists():
        return presets

    for pattern in ("*.yaml", "*.yml"):
        for yaml_file in sorted(directory.glob(pattern)):
            try:
                preset = load_preset_from_yaml(yaml_file)
            except (ConfigurationError, yaml.YAMLError) as e:
                logger.warning("Skipping preset %s: %s", yaml_file, e)
                continue
            if preset:
                presets.append(preset)

    return presets


class PresetRegistry:
    """
    Central registry for presets.

    Loads presets from:
    1. Built-in YAML files
    2. Custom preset directories
    """

    def __init__(self) -> None:
        self.presets: dict[str, Preset] = {}
        self._loaded = False

    def register_preset(self, preset: Preset) -> None:
        """Register a preset, replacing any preset with the same id."""
        if preset.id in self.presets:
            logger.debug("Preset %s overridden by %s", preset.id, preset.source)
        self.presets[preset.id] = preset

    def get_preset(self, preset_id: str) -> Preset | None:
        """Get a preset by ID."""
        return self.presets.get(preset_id)

    def resolve_options(self, preset: Preset) -> dict[str, Any]:
        """Merge a preset's options over those of its base chain."""
        seen: set[str] = set()
        chain: list[Preset] = []
        current: Preset | None = preset

        while current is not None:
            if current.id in seen:
                raise ConfigurationError(f"Circular preset inheritance at {current.id}", option="base")
            seen.add(current.id)
            chain.append(current)
            current = self.get_preset(current.base) if current.base else None

        merged: dict[str, Any] = {}
        for item in reversed(chain):
            merged.update(item.options)
        return merged

    def get_config(self, preset_id: str, **overrides: Any) -> TokenizerConfig:
        """
        Build the configuration for a preset.

        Args:
            preset_id: Registered preset id
            **overrides: Options taking precedence over the preset

        Raises:
            KeyError: If the preset is unknown
            ConfigurationError: If the merged options are invalid
        """
        preset = self.get_preset(preset_id)
        if preset is None:
            raise KeyError(preset_id)

        options = self.resolve_options(preset)
        options.update(overrides)
        return build_config(**options)

    def load_builtin(self) -> None:
        """Load built-in presets from package."""
        if self._loaded:
            return

        for preset in load_presets_from_directory(BUILTIN_PRESETS_DIR):
            self.register_preset(preset)

        self._loaded = True

    def load_from_directory(self, directory: Path) -> None:
        """Load presets from a custom directory."""
        for preset in load_presets_from_directory(directory):
            self.register_preset(preset)


# Global registry instance
_registry: PresetRegistry | None = None


def get_registry() -> PresetRegistry:
    """Get the global preset registry."""
    global _registry
    if _registry is None:
        _registry = PresetRegistry()
        _registry.load_builtin()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (for testing)."""
    global _registry
    _registry = None


def get_preset(preset_id: str) -> Preset | None:
    """Look up a preset in the global registry."""
    return get_registry().get_preset(preset_id)
