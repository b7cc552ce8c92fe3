"""Core modules: region hierarchy, name resolution and the identity number codec."""

from cnid_synth.core.errors import ValidationError
from cnid_synth.core.hierarchy import (
    AdministrativeHierarchy,
    AdministrativeUnit,
    is_direct_city,
)
from cnid_synth.core.id_card import (
    DecodedIdNumber,
    compute_checksum,
    decode,
    encode,
    verify_checksum,
)
from cnid_synth.core.resolver import (
    FuzzyMatchIndex,
    RegionCodeIndex,
    RegionResolver,
)
from cnid_synth.core.strategies import PluginRegistry, PluginType

__all__ = [
    "ValidationError",
    "AdministrativeHierarchy",
    "AdministrativeUnit",
    "is_direct_city",
    # Identity number codec
    "DecodedIdNumber",
    "compute_checksum",
    "decode",
    "encode",
    "verify_checksum",
    # Name resolution
    "FuzzyMatchIndex",
    "RegionCodeIndex",
    "RegionResolver",
    # Plugins
    "PluginRegistry",
    "PluginType",
]
