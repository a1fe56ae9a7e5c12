from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from setgame.engine.board import BoardConfig


class ConfigError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Missing config file: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ConfigError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ConfigError(f"Expected int for {key}")
    return v


def _require_section(obj: object, key: str) -> Mapping[str, object]:
    if not isinstance(obj, dict):
        raise ConfigError("settings must be an object")
    v = obj.get(key)
    if not isinstance(v, dict):
        raise ConfigError(f"settings.{key} must be an object")
    return v


@dataclass(frozen=True)
class ClientSettings:
    width: int = 1024
    height: int = 768
    resolve_delay: float = 0.6  # seconds between the third click and resolution
    card_width: int = 150
    card_height: int = 150
    columns: int = 6


@dataclass(frozen=True)
class GameSettings:
    board: BoardConfig = field(default_factory=BoardConfig)
    client: ClientSettings = field(default_factory=ClientSettings)


def _parse_client(raw: Mapping[str, object]) -> ClientSettings:
    delay = raw.get("resolve_delay")
    if not isinstance(delay, (int, float)) or isinstance(delay, bool):
        raise ConfigError("resolve_delay must be number")
    defaults = ClientSettings()
    return ClientSettings(
        width=_require_int(raw, "width"),
        height=_require_int(raw, "height"),
        resolve_delay=float(delay),
        card_width=_require_int(raw, "card_width") if "card_width" in raw else defaults.card_width,
        card_height=_require_int(raw, "card_height") if "card_height" in raw else defaults.card_height,
        columns=_require_int(raw, "columns") if "columns" in raw else defaults.columns,
    )


class ConfigService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_settings(self, path: Path | None = None) -> GameSettings:
        settings_path = path or self._data_dir / "settings.json"
        raw = _load_json(settings_path)
        schema = _load_json(self._schema_dir / "settings.schema.json")
        validate_json(raw, schema, context=str(settings_path))

        board_raw = _require_section(raw, "board")
        client_raw = _require_section(raw, "client")
        board = BoardConfig(
            tableau_size=_require_int(board_raw, "tableau_size"),
            max_expansions=_require_int(board_raw, "max_expansions"),
        )
        return GameSettings(board=board, client=_parse_client(client_raw))

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_settings()
