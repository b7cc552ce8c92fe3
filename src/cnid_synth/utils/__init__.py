"""Utility functions and validators."""

from cnid_synth.utils.validators import (
    validate_chinese_id_card,
    validate_chinese_id_card_with_checksum,
    validate_phone,
)

__all__ = [
    "validate_chinese_id_card",
    "validate_chinese_id_card_with_checksum",
    "validate_phone",
]
