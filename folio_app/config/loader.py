"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AssetClassParams,
    DefaultConfig,
    HistoryParams,
    LookbackParams,
    RegionParams,
    RiskParams,
    get_default_config,
)

_SECTIONS = {
    "lookback": LookbackParams,
    "asset_class": AssetClassParams,
    "region": RegionParams,
    "risk": RiskParams,
    "history": HistoryParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_instruments(self) -> dict[str, Any]:
        """
        Load the `instruments` section of instruments.yaml.

        Raises:
            ConfigurationError: If the file cannot be parsed, or the document
                or its `instruments` section is not a mapping
        """
        instruments_file = self.config_dir / "instruments.yaml"

        if not instruments_file.exists():
            return {}

        try:
            with open(instruments_file, encoding="utf-8") as f:
                instruments_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Cannot parse {instruments_file.name}: {e}",
                source=str(instruments_file),
            ) from e

        source = str(instruments_file)
        _require_mapping(instruments_config, instruments_file.name, source)
        instruments = instruments_config.get("instruments") or {}
        _require_mapping(instruments, "instruments", source)
        return instruments  # type: ignore[no-any-return]

    def load_instrument_config(self, instrument_id: str) -> dict[str, Any]:
        """
        Load instrument-specific configuration overrides.

        Raises:
            ConfigurationError: If instruments.yaml is unusable or the
                instrument entry is not a mapping
        """
        instrument_config = self.load_instruments().get(instrument_id) or {}
        _require_mapping(instrument_config, f"instruments.{instrument_id}",
                         str(self.config_dir / "instruments.yaml"))
        return instrument_config  # type: ignore[no-any-return]

    def merge_config(
        self,
        instrument_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call overrides (highest priority)
        2. Instrument-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        instrument_config = self.load_instrument_config(instrument_id)
        config = self._deep_merge(config, instrument_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def _require_mapping(value: Any, name: str, source: str) -> None:
    if not isinstance(value, dict):
        raise ConfigurationError(
            f"'{name}' must be a mapping, got {type(value).__name__}",
            source=source,
        )


def build_config(merged: dict[str, Any]) -> DefaultConfig:
    """
    Turn a merged configuration dictionary back into a DefaultConfig.

    Unknown sections and keys are ignored so that a shared instruments file
    can carry settings for other consumers.

    Raises:
        ConfigurationError: If a section is not a mapping
    """
    sections = {}
    for name, params_cls in _SECTIONS.items():
        section = merged.get(name, {}) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Configuration section '{name}' must be a mapping",
                source=name,
            )
        known = {f.name for f in fields(params_cls)}
        sections[name] = params_cls(**{k: v for k, v in section.items() if k in known})

    return DefaultConfig(**sections)
