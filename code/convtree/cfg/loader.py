from __future__ import annotations

import sys
import warnings
from dataclasses import MISSING, asdict, fields, is_dataclass
from pathlib import Path
from typing import (
    Any,
    Literal,
    Mapping,
    MutableMapping,
    Sequence,
    Type,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

import yaml

from convtree.geometry import InvalidRegion, Rectangle
from convtree.grid.convolution import check_kernel
from convtree.stats import TAG_INHERITANCE_POLICIES

from .schema import Config


class ConfigError(ValueError):
    pass


def load_config(path: Union[str, Path]) -> Config:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except Exception as exc:
        raise ConfigError(f"Failed to read config file: {p}") from exc
    return loads_config(text)


def loads_config(yaml_text: str) -> Config:
    try:
        data = yaml.safe_load(yaml_text) or {}
    except Exception as exc:
        raise ConfigError(f"Invalid configuration data: {exc}") from exc

    if not isinstance(data, Mapping):
        raise ConfigError(f"Top-level configuration must be a mapping, got {type(data).__name__}")

    cfg = _from_mapping(Config, data, path="config")
    validate_config(cfg)
    return cfg


def validate_config(cfg: Config) -> None:
    try:
        Rectangle(cfg.region.top_left, cfg.region.bottom_right)
    except InvalidRegion as exc:
        raise ConfigError(f"region is invalid: {exc}") from exc

    t = cfg.tree
    if t.min_width < 0.0:
        raise ConfigError("tree.min_width must be >= 0")
    if t.min_height < 0.0:
        raise ConfigError("tree.min_height must be >= 0")
    if t.max_point_weight < 0:
        raise ConfigError("tree.max_point_weight must be >= 0")
    if t.max_depth < 0:
        raise ConfigError("tree.max_depth must be >= 0")
    if t.tag_inheritance not in TAG_INHERITANCE_POLICIES:
        raise ConfigError(f"tree.tag_inheritance must be one of {list(TAG_INHERITANCE_POLICIES)}")

    c = cfg.conv
    if c.grid_size < 2:
        raise ConfigError("conv.grid_size must be >= 2")
    if c.convolution_passes < 0:
        raise ConfigError("conv.convolution_passes must be >= 0")
    if c.kernel is not None and not check_kernel(c.kernel):
        warnings.warn(
            "conv.kernel is not a non-empty square matrix; the default 3x3 kernel will be used.",
            UserWarning,
        )
    elif c.kernel is not None and len(c.kernel) > c.grid_size:
        warnings.warn(
            f"conv.kernel size ({len(c.kernel)}) exceeds conv.grid_size ({c.grid_size}); "
            "convolution passes will be skipped.",
            UserWarning,
        )


def to_dict(cfg: Config) -> dict:
    return asdict(cfg)


def _from_mapping(cls: Type[Any], data: Mapping[str, Any], path: str) -> Any:
    if not is_dataclass(cls):
        raise ConfigError(f"Internal error: target {cls!r} is not a dataclass")

    allowed = {f.name for f in fields(cls)}
    unknown = set(data.keys()) - allowed
    if unknown:
        pretty = ", ".join(sorted(map(str, unknown)))
        raise ConfigError(f"Unknown field(s) at {path}: {pretty}")

    mod = sys.modules.get(cls.__module__)
    gns = mod.__dict__ if mod is not None else None
    try:
        type_hints = get_type_hints(cls, globalns=gns, localns=None)
    except Exception:
        type_hints = {}

    kwargs: MutableMapping[str, Any] = {}
    for f in fields(cls):
        key = f.name
        target_type = type_hints.get(key, f.type)
        if key in data:
            kwargs[key] = _coerce_value_to_type(data[key], target_type, f"{path}.{key}")
        else:
            if f.default is not MISSING or f.default_factory is not MISSING:
                continue
            raise ConfigError(f"Missing required field: {path}.{key}")

    try:
        return cls(**kwargs)
    except Exception as exc:
        raise ConfigError(f"Failed to construct {cls.__name__} at {path}: {exc}") from exc


def _coerce_value_to_type(value: Any, typ: Any, path: str) -> Any:
    origin = get_origin(typ)
    args = get_args(typ)

    if is_dataclass(typ):
        if not isinstance(value, Mapping):
            raise ConfigError(f"Expected mapping at {path}, got {type(value).__name__}")
        return _from_mapping(typ, value, path)

    # Optional[X] is the only union the schema uses.
    if origin is Union:
        if value is None:
            return None
        (inner,) = [a for a in args if a is not type(None)]
        return _coerce_value_to_type(value, inner, path)

    if origin is Literal:
        if value not in args:
            raise ConfigError(f"{path}: expected one of {sorted(map(repr, args))}, got {value!r}")
        return value

    if origin in (tuple, list):
        if isinstance(value, str) or not isinstance(value, Sequence):
            raise ConfigError(f"Expected sequence at {path}, got {type(value).__name__}")
        if origin is list:
            return [_coerce_value_to_type(v, args[0], f"{path}[{i}]") for i, v in enumerate(value)]
        if len(value) != len(args):
            raise ConfigError(f"Expected {len(args)} item(s) at {path}, got {len(value)}")
        return tuple(
            _coerce_value_to_type(v, a, f"{path}[{i}]") for i, (v, a) in enumerate(zip(value, args))
        )

    if typ is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ConfigError(f"Expected int at {path}, got {value!r}")

    if typ is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        # PyYAML reads exponent forms without a dot (``1e3``) as strings.
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass
        raise ConfigError(f"Expected float at {path}, got {value!r}")

    raise ConfigError(f"Unsupported field type at {path}: {typ!r}")
