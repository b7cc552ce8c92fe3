"""Generator settings.

Settings come from a YAML file, from environment variables, or directly from
keyword arguments. All three produce the same GeneratorConfig dataclass.

Example YAML configuration:

    precompute_fuzzy_match: true
    fallback_area_code: "310101"
    name_options:
      surnames: ["赵", "钱", "孙", "李"]
      name_lengths: [1]
    address_options:
      community_ratio: 0.5
      street_ratio: 0.4
      building_ratio: 0.1
    common_cities:
      苏州: "320500"
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


# 常用城市简称到区划代码的映射
DEFAULT_COMMON_CITIES: dict[str, str] = {
    "北京": "110000",
    "上海": "310000",
    "天津": "120000",
    "重庆": "500000",
    "广州": "440100",
    "深圳": "440300",
    "武汉": "420100",
    "南京": "320100",
    "杭州": "330100",
    "西安": "610100",
    "成都": "510100",
}

# 地区名称无法解析时使用的默认区划（北京市东城区）
DEFAULT_FALLBACK_AREA_CODE = "110101"

_AREA_CODE_PATTERN = re.compile(r"[0-9]{6}")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class GeneratorConfig:
    """Configuration for PersonGenerator.

    Attributes:
        lazy_load: Defer loading the reference dataset until first use.
        precompute_fuzzy_match: Build the fuzzy name index eagerly.
        surnames: Restrict generated surnames to this list.
        name_lengths: Allowed given-name lengths, e.g. [1, 2].
        community_ratio: Share of residential-compound addresses.
        street_ratio: Share of plain street addresses.
        building_ratio: Share of commercial-building addresses.
        fallback_area_code: Code used when an area name cannot be resolved.
        dataset_path: Custom reference dataset; None uses the bundled one.
        common_cities: Alias table consulted after exact name matching.
    """

    lazy_load: bool = False
    precompute_fuzzy_match: bool = False
    surnames: Optional[list[str]] = None
    name_lengths: Optional[list[int]] = None
    community_ratio: float = 0.6
    street_ratio: float = 0.3
    building_ratio: float = 0.1
    fallback_area_code: str = DEFAULT_FALLBACK_AREA_CODE
    dataset_path: Optional[str] = None
    common_cities: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COMMON_CITIES))

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not _AREA_CODE_PATTERN.fullmatch(self.fallback_area_code):
            raise ValueError(f"fallback_area_code must be 6 digits, got {self.fallback_area_code!r}")
        for ratio_name in ("community_ratio", "street_ratio", "building_ratio"):
            value = getattr(self, ratio_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{ratio_name} must be between 0.0 and 1.0, got {value}")
        if self.surnames is not None and not all(isinstance(s, str) and s for s in self.surnames):
            raise ValueError("surnames must be non-empty strings")
        if self.name_lengths is not None and not all(
            isinstance(n, int) and not isinstance(n, bool) and n >= 1 for n in self.name_lengths
        ):
            raise ValueError(f"name_lengths must be positive integers, got {self.name_lengths}")
        for alias, code in self.common_cities.items():
            if not _AREA_CODE_PATTERN.fullmatch(code):
                raise ValueError(f"common_cities[{alias!r}] must be a 6-digit code, got {code!r}")

    @classmethod
    def from_env(cls, **overrides) -> "GeneratorConfig":
        """Build a configuration from CNID_SYNTH_* environment variables.

        Args:
            **overrides: Values that take precedence over the environment.
        """
        values: dict = {}

        dataset = os.getenv("CNID_SYNTH_DATASET")
        if dataset:
            values["dataset_path"] = dataset

        fallback = os.getenv("CNID_SYNTH_FALLBACK_AREA_CODE")
        if fallback:
            values["fallback_area_code"] = fallback

        precompute = os.getenv("CNID_SYNTH_PRECOMPUTE_FUZZY")
        if precompute is not None:
            values["precompute_fuzzy_match"] = precompute.lower() in _TRUE_VALUES

        lazy = os.getenv("CNID_SYNTH_LAZY_LOAD")
        if lazy is not None:
            values["lazy_load"] = lazy.lower() in _TRUE_VALUES

        values.update(overrides)
        return cls(**values)


def parse_config(data: object) -> GeneratorConfig:
    """Build a GeneratorConfig from parsed YAML data.

    Raises:
        ValueError: If the structure or any value is invalid.
    """
    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config structure: expected dict, got {type(data).__name__}")

    name_options = data.get("name_options") or {}
    address_options = data.get("address_options") or {}
    if not isinstance(name_options, dict):
        raise ValueError("name_options must be a mapping")
    if not isinstance(address_options, dict):
        raise ValueError("address_options must be a mapping")

    common_cities = dict(DEFAULT_COMMON_CITIES)
    extra_cities = data.get("common_cities") or {}
    if not isinstance(extra_cities, dict):
        raise ValueError("common_cities must be a mapping")
    common_cities.update({str(k): str(v) for k, v in extra_cities.items()})

    fallback = data.get("fallback_area_code", DEFAULT_FALLBACK_AREA_CODE)

    return GeneratorConfig(
        lazy_load=bool(data.get("lazy_load", False)),
        precompute_fuzzy_match=bool(data.get("precompute_fuzzy_match", False)),
        surnames=name_options.get("surnames"),
        name_lengths=name_options.get("name_lengths"),
        community_ratio=float(address_options.get("community_ratio", 0.6)),
        street_ratio=float(address_options.get("street_ratio", 0.3)),
        building_ratio=float(address_options.get("building_ratio", 0.1)),
        fallback_area_code=str(fallback),
        dataset_path=data.get("dataset_path"),
        common_cities=common_cities,
    )


def load_config_from_yaml(path: Path | str) -> GeneratorConfig:
    """Load generator settings from a YAML file.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        ValueError: If the configuration is invalid.
        yaml.YAMLError: If the YAML is malformed.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return parse_config(data)
