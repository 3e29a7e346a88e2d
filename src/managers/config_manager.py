"""
Engine configuration

Reads engine.yaml (optionally split into several files with an `include:`
list) and turns it into EngineSettings plus named keyframe sequences.
"""

import yaml
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from animations.keyframes import KeyframeSequence
from models.engine_settings import EngineSettings
from models.enums import LogCategory, LogLevel, OptimizationLevel
from utils.logger import get_logger, set_log_level
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent

_ENUM_FIELDS = {
    "default_level": OptimizationLevel,
    "log_level": LogLevel,
}


def _read_mapping(path: Path) -> Dict[str, Any]:
    """Parse one YAML file whose top level must be a mapping (empty file → {})"""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: top level must be a mapping, got {type(data).__name__}")
    return data


class ConfigManager:
    """
    Engine configuration loader

    engine.yaml is either the whole configuration or an `include:` list of
    sibling files merged top-level key by key (later files win). When it
    cannot be read the factory defaults file is used instead. Individual
    bad settings or sequences are logged and skipped, never fatal.

    Example:
        config = ConfigManager()
        config.load()

        settings = config.settings                 # EngineSettings
        intro = config.get_sequence("intro_fade")  # KeyframeSequence or None
    """

    def __init__(self, config_path="config/engine.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Args:
            config_path: Main config file (relative to src/, or absolute)
            defaults_path: Fallback used when the main config fails to load
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}

        self.settings = EngineSettings()
        self.sequences: Dict[str, KeyframeSequence] = {}

    def load(self) -> Dict[str, Any]:
        """
        Read configuration and rebuild settings and sequences

        The `log_level` setting is applied to the shared logger before
        sequences are decoded.

        Returns:
            The merged raw config data
        """
        try:
            self.data = self._load_main(SRC_DIR / self.config_path)
        except Exception as ex:
            log.error(f"Failed to load {self.config_path}", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._load_factory_defaults()

        self.settings = self._parse_settings(self.data.get("engine") or {})
        set_log_level(self.settings.log_level)
        self.sequences = self._parse_sequences(self.data.get("sequences") or {})

        log.info(
            "Engine configuration loaded",
            default_level=self.settings.default_level.name,
            cache_max_size=self.settings.cache_max_size,
            sequences=len(self.sequences),
        )
        return self.data

    def _load_main(self, path: Path) -> Dict[str, Any]:
        main = _read_mapping(path)
        includes = main.get("include")
        if includes is None:
            log.debug("Monolithic configuration", file=path.name)
            return main
        return self._merge_includes(includes, path.parent)

    def _merge_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Merge the files named in `include:` (missing or malformed file aborts the load)

        Args:
            include_list: File names relative to config_dir
            config_dir: Directory of the main config file
        """
        merged: Dict[str, Any] = {}
        for filename in include_list:
            part = _read_mapping(config_dir / filename)
            merged.update(part)
            log.debug(f"Included {filename}", keys=", ".join(part))

        log.info("Configuration files merged", files=len(include_list), sections=", ".join(merged))
        return merged

    def _load_factory_defaults(self) -> Dict[str, Any]:
        try:
            return _read_mapping(SRC_DIR / self.factory_defaults_path)
        except Exception as ex:
            log.error("Failed to load factory defaults, using built-in settings",
                      error=str(ex), error_type=type(ex).__name__)
            return {}

    # ===== Settings =====

    def _parse_settings(self, raw: Dict[str, Any]) -> EngineSettings:
        """
        Build EngineSettings from the `engine:` section

        Unknown keys and values of the wrong type are logged and ignored,
        leaving the default for that field.
        """
        defaults = EngineSettings()
        known = {f.name: f for f in fields(EngineSettings)}
        values: Dict[str, Any] = {}

        for key, value in raw.items():
            if key not in known:
                log.warn(f"Unknown engine setting ignored: {key}")
                continue
            try:
                values[key] = self._coerce_setting(key, value, getattr(defaults, key))
            except (TypeError, ValueError) as ex:
                log.warn(f"Invalid value for engine setting '{key}', using default",
                         value=value, error=str(ex))

        if values.get("aggressive_threshold", defaults.aggressive_threshold) < values.get("basic_threshold", defaults.basic_threshold):
            log.warn("aggressive_threshold below basic_threshold, using defaults for both")
            values.pop("aggressive_threshold", None)
            values.pop("basic_threshold", None)

        return EngineSettings(**values)

    @staticmethod
    def _coerce_setting(key: str, value: Any, default: Any) -> Any:
        if key in _ENUM_FIELDS:
            return Serializer.str_to_enum(str(value).upper(), _ENUM_FIELDS[key])
        if isinstance(value, bool):
            raise TypeError("boolean is not a number")
        if isinstance(default, int):
            coerced = int(value)
        else:
            coerced = float(value)
        if coerced < 0:
            raise ValueError("must not be negative")
        return coerced

    # ===== Sequences =====

    def _parse_sequences(self, raw: Dict[str, Any]) -> Dict[str, KeyframeSequence]:
        sequences: Dict[str, KeyframeSequence] = {}

        for name, definition in raw.items():
            try:
                sequence = Serializer.sequence_from_dict(definition)
                sequence.validate()
            except (TypeError, ValueError) as ex:
                log.error(f"Skipping keyframe sequence '{name}'", error=str(ex), error_type=type(ex).__name__)
                continue
            sequences[name] = sequence

        return sequences

    def get_sequence(self, name: str) -> Optional[KeyframeSequence]:
        return self.sequences.get(name)

    def get_sequence_names(self) -> List[str]:
        return list(self.sequences)
