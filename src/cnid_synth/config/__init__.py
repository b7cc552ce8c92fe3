"""Configuration module for cnid-synth."""

from cnid_synth.config.dataset_loader import (
    RegionDataset,
    RegionRecord,
    load_dataset,
    load_dataset_safe,
)
from cnid_synth.config.settings import (
    GeneratorConfig,
    load_config_from_yaml,
)

__all__ = [
    "RegionDataset",
    "RegionRecord",
    "load_dataset",
    "load_dataset_safe",
    "GeneratorConfig",
    "load_config_from_yaml",
]
