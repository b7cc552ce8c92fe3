"""Validation utility functions."""

import re

from cnid_synth.core.id_card import verify_checksum


# Regex patterns for validation
_CHINESE_PHONE_PATTERN = re.compile(r"1[3-9][0-9]{9}")
_CHINESE_ID_CARD_PATTERN = re.compile(
    r"[1-9][0-9]{5}(18|19|20)[0-9]{2}(0[1-9]|1[0-2])(0[1-9]|[12][0-9]|3[01])[0-9]{3}[0-9Xx]"
)


def validate_phone(phone: str) -> bool:
    """Validate a Chinese mainland mobile phone number.

    Chinese mobile numbers start with 1, followed by 3-9, then 9 more digits.

    Examples:
        >>> validate_phone("13800138000")
        True
        >>> validate_phone("12345678901")
        False
    """
    if not phone or not isinstance(phone, str):
        return False
    return bool(_CHINESE_PHONE_PATTERN.fullmatch(phone))


def validate_chinese_id_card(id_card: str) -> bool:
    """Validate the format of an 18-digit Chinese ID card number.

    Note:
        This validates format, including a plausible birth date, but does not
        verify the checksum.

    Examples:
        >>> validate_chinese_id_card("110101199003077758")
        True
        >>> validate_chinese_id_card("123456789012345678")
        False
    """
    if not id_card or not isinstance(id_card, str):
        return False
    return bool(_CHINESE_ID_CARD_PATTERN.fullmatch(id_card))


def validate_chinese_id_card_with_checksum(id_card: str) -> bool:
    """Validate Chinese ID card number with checksum verification.

    Examples:
        >>> validate_chinese_id_card_with_checksum("11010119900307109X")
        True
    """
    if not validate_chinese_id_card(id_card):
        return False
    return verify_checksum(id_card)
