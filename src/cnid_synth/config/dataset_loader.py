"""YAML loader for the administrative division reference dataset.

The dataset lists every unit of the four-level hierarchy (province, city,
district, township) by its GB/T 2260 code. A copy ships with the package;
callers may point at their own file to use a larger or different set.

Example YAML:

    provinces:
      - {code: "110000", name: 北京市}
    cities:
      - {code: "110100", name: 市辖区}
    districts:
      - {code: "110101", name: 东城区}
    towns:
      - {code: "110101001", name: 东华门街道}
"""

import re
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml


LEVELS = ("province", "city", "district", "town")

# 每一级在 YAML 中对应的键
_SECTION_KEYS = {
    "province": "provinces",
    "city": "cities",
    "district": "districts",
    "town": "towns",
}

_CODE_PATTERNS = {
    "province": re.compile(r"[1-9][0-9]0000"),
    "city": re.compile(r"[1-9][0-9]{3}00"),
    "district": re.compile(r"[1-9][0-9]{5}"),
    "town": re.compile(r"[1-9][0-9]{8}"),
}


@dataclass(frozen=True)
class RegionRecord:
    """A single raw entry of the reference dataset.

    Attributes:
        level: One of province, city, district, town.
        code: Full administrative code (6 digits, 9 for towns).
        name: Display name.
    """

    level: str
    code: str
    name: str

    def __post_init__(self) -> None:
        """Validate the record."""
        if self.level not in LEVELS:
            raise ValueError(f"Unknown region level: {self.level}")
        if not self.name:
            raise ValueError(f"Region {self.code} has an empty name")
        if not _CODE_PATTERNS[self.level].fullmatch(self.code):
            raise ValueError(f"Invalid {self.level} code: {self.code!r}")
        if self.level == "city" and self.code.endswith("0000"):
            raise ValueError(f"City code must carry a city segment: {self.code}")
        if self.level == "district" and self.code.endswith("00"):
            raise ValueError(f"District code must carry a district segment: {self.code}")

    @property
    def parent_code(self) -> Optional[str]:
        """Code of the containing unit, None for provinces."""
        if self.level == "province":
            return None
        if self.level == "city":
            return self.code[:2] + "0000"
        if self.level == "district":
            return self.code[:4] + "00"
        return self.code[:6]


@dataclass
class RegionDataset:
    """The complete reference dataset, grouped by level in file order."""

    provinces: list[RegionRecord] = field(default_factory=list)
    cities: list[RegionRecord] = field(default_factory=list)
    districts: list[RegionRecord] = field(default_factory=list)
    towns: list[RegionRecord] = field(default_factory=list)
    source: str = "<memory>"

    def __len__(self) -> int:
        return len(self.provinces) + len(self.cities) + len(self.districts) + len(self.towns)

    def validate(self) -> None:
        """Check code uniqueness and parent links, and require at least one district.

        Raises:
            ValueError: On duplicate codes, a dangling parent reference or
                a dataset without districts.
        """
        province_codes = self._unique_codes(self.provinces, "province")
        city_codes = self._unique_codes(self.cities, "city")
        district_codes = self._unique_codes(self.districts, "district")
        self._unique_codes(self.towns, "town")

        for record in self.cities:
            if record.parent_code not in province_codes:
                raise ValueError(f"City {record.code} ({record.name}) has no province {record.parent_code}")
        for record in self.districts:
            if record.parent_code not in city_codes:
                raise ValueError(f"District {record.code} ({record.name}) has no city {record.parent_code}")
        for record in self.towns:
            if record.parent_code not in district_codes:
                raise ValueError(f"Town {record.code} ({record.name}) has no district {record.parent_code}")
        if not self.districts:
            raise ValueError(f"Dataset {self.source} defines no districts")

    @staticmethod
    def _unique_codes(records: list[RegionRecord], level: str) -> set[str]:
        codes: set[str] = set()
        for record in records:
            if record.code in codes:
                raise ValueError(f"Duplicate {level} code: {record.code}")
            codes.add(record.code)
        return codes


def default_dataset_path() -> Path:
    """Path of the dataset bundled with the package."""
    return Path(str(resources.files("cnid_synth").joinpath("data", "regions.yaml")))


def parse_dataset(data: object, source: str = "<memory>") -> RegionDataset:
    """Build a validated RegionDataset from already-parsed YAML data.

    Args:
        data: Mapping with provinces/cities/districts/towns lists.
        source: Description of where the data came from, used in messages.

    Returns:
        The validated dataset.

    Raises:
        ValueError: If the structure or any entry is invalid.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Invalid dataset structure: expected dict, got {type(data).__name__}")

    dataset = RegionDataset(source=source)
    for level in LEVELS:
        key = _SECTION_KEYS[level]
        entries = data.get(key) or []
        if not isinstance(entries, list):
            raise ValueError(f"Invalid {key} structure: expected list, got {type(entries).__name__}")

        records = getattr(dataset, key)
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ValueError(f"{key}[{i}] is not a dict: {type(entry).__name__}")
            if "code" not in entry:
                raise ValueError(f"{key}[{i}] missing required field: code")
            if "name" not in entry:
                raise ValueError(f"{key}[{i}] missing required field: name")
            records.append(RegionRecord(level=level, code=str(entry["code"]), name=str(entry["name"])))

    if not dataset.provinces:
        raise ValueError(f"Dataset {source} defines no provinces")

    dataset.validate()
    return dataset


def load_dataset(path: Path | str | None = None) -> RegionDataset:
    """Load the reference dataset from a YAML file.

    Args:
        path: Dataset file. Defaults to the bundled dataset.

    Returns:
        The validated dataset.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the dataset is structurally invalid.
        yaml.YAMLError: If the YAML is malformed.

    Example:
        >>> dataset = load_dataset()
        >>> dataset.provinces[0].name
        '北京市'
    """
    path = Path(path) if path is not None else default_dataset_path()

    if not path.exists():
        raise FileNotFoundError(f"Region dataset not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return parse_dataset(data, source=str(path))


def load_dataset_safe(path: Path | str | None = None) -> tuple[Optional[RegionDataset], Optional[str]]:
    """Load the dataset, returning an error message instead of raising.

    Returns:
        Tuple of (dataset, error_message). On success error_message is None;
        on failure dataset is None.
    """
    try:
        return load_dataset(path), None
    except FileNotFoundError as e:
        return None, str(e)
    except ValueError as e:
        return None, f"Dataset error: {e}"
    except yaml.YAMLError as e:
        return None, f"YAML parsing error: {e}"
