"""Tests for the identity number codec."""

import random
from datetime import date
from unittest.mock import Mock

import pytest

from cnid_synth.core.errors import ValidationError
from cnid_synth.core.id_card import (
    FEMALE,
    MALE,
    birth_date_for_year,
    birth_date_from_age,
    calculate_age,
    compute_checksum,
    days_in_month,
    decode,
    encode,
    generate_sequence_code,
    is_leap_year,
    random_birth_date,
    validate_encode_options,
    verify_checksum,
)


def _fixed_rng(value: int) -> Mock:
    rng = Mock(spec=random.Random)
    rng.randint.return_value = value
    return rng


class TestChecksum:
    """Tests for checksum computation and verification."""

    def test_known_checksums(self):
        """Test checksums of known numbers."""
        assert compute_checksum("11010119900307771") == "5"
        assert compute_checksum("11010119900307109") == "X"
        assert compute_checksum("42010219900101124") == "4"

    def test_verify_valid(self, valid_id_cards):
        """Test that valid numbers verify."""
        for number in valid_id_cards:
            assert verify_checksum(number) is True

    def test_verify_lowercase_x(self):
        """Test that a lowercase x checksum is accepted."""
        assert verify_checksum("11010119900307109x") is True

    def test_verify_mismatch(self):
        """Test that a wrong checksum fails."""
        assert verify_checksum("110101199003077710") is False

    def test_verify_malformed(self):
        """Test that malformed input returns False instead of raising."""
        assert verify_checksum("") is False
        assert verify_checksum("11010119900307") is False
        assert verify_checksum("1101011990030777AB") is False
        assert verify_checksum(None) is False

    def test_verify_rejects_non_ascii_and_newline(self):
        """Test that full-width digits and a trailing newline fail verification."""
        assert verify_checksum("１１０１０１199003077715") is False
        assert verify_checksum("110101199003077715\n") is False


class TestSequenceCode:
    """Tests for gender-carrying sequence codes."""

    def test_male_odd_unchanged(self):
        """Test that an odd draw is kept for male."""
        assert generate_sequence_code(MALE, _fixed_rng(1)) == "001"

    def test_male_even_incremented(self):
        """Test that an even draw is incremented for male."""
        assert generate_sequence_code(MALE, _fixed_rng(998)) == "999"

    def test_female_odd_decremented(self):
        """Test that an odd draw is decremented for female."""
        assert generate_sequence_code(FEMALE, _fixed_rng(999)) == "998"

    def test_female_low_clamped(self):
        """Test that a female draw of 1 is clamped to 2."""
        assert generate_sequence_code(FEMALE, _fixed_rng(1)) == "002"

    def test_zero_padded(self):
        """Test that codes are zero-padded to three digits."""
        assert generate_sequence_code(FEMALE, _fixed_rng(42)) == "042"


class TestEncode:
    """Tests for encode."""

    def test_structure(self, rng):
        """Test region code, birth date and length of an encoded number."""
        number = encode("420102", "19900101", FEMALE, rng=rng)

        assert len(number) == 18
        assert number.startswith("42010219900101")
        assert verify_checksum(number)

    def test_every_encode_has_valid_checksum(self, rng):
        """Test checksum validity across many encodes."""
        for _ in range(500):
            gender = rng.randint(0, 1)
            number = encode("110105", random_birth_date(rng), gender, rng=rng)
            assert verify_checksum(number)

    def test_gender_parity(self, rng):
        """Test that the 17th digit's parity matches gender over 1000 encodes."""
        for i in range(1000):
            gender = i % 2
            number = encode("310101", "20000229", gender, rng=rng)
            assert int(number[16]) % 2 == gender

    def test_invalid_region_code(self):
        """Test that a malformed region code names the field."""
        with pytest.raises(ValidationError) as exc_info:
            encode("11010", "19900101", MALE)
        assert exc_info.value.field == "area_code"

    def test_invalid_birth_date(self):
        """Test that a malformed birth date names the field."""
        with pytest.raises(ValidationError) as exc_info:
            encode("110101", "1990-01-01", MALE)
        assert exc_info.value.field == "birthday"

    @pytest.mark.parametrize("region_code", ["110101\n", "１１０１０１", " 110101"])
    def test_region_code_must_be_ascii_digits(self, region_code):
        """Test that newline-suffixed and full-width region codes name the field."""
        with pytest.raises(ValidationError) as exc_info:
            encode(region_code, "19900101", MALE)
        assert exc_info.value.field == "area_code"

    @pytest.mark.parametrize("birth_date", ["19900101\n", "１９９００１０１"])
    def test_birth_date_must_be_ascii_digits(self, birth_date):
        """Test that newline-suffixed and full-width birth dates name the field."""
        with pytest.raises(ValidationError) as exc_info:
            encode("110101", birth_date, MALE)
        assert exc_info.value.field == "birthday"

    @pytest.mark.parametrize("gender", [2, -1, True, "1"])
    def test_invalid_gender(self, gender):
        """Test that anything but 0 or 1 is rejected as gender."""
        with pytest.raises(ValidationError) as exc_info:
            encode("110101", "19900101", gender)
        assert exc_info.value.field == "gender"

    def test_validation_error_is_value_error(self):
        """Test that ValidationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_encode_options(region_code="abc")

    def test_validate_skips_missing(self):
        """Test that None options are not validated."""
        validate_encode_options()


class TestDecode:
    """Tests for decode."""

    def test_decode_fields(self):
        """Test decoding region, birth date and gender."""
        decoded = decode("110101199003077715", today=date(2024, 6, 1))

        assert decoded.region_code == "110101"
        assert (decoded.birth_year, decoded.birth_month, decoded.birth_day) == (1990, 3, 7)
        assert decoded.birth_date == "1990-03-07"
        assert decoded.gender == "male"
        assert decoded.age == 34

    def test_decode_female(self):
        """Test that an even sequence digit decodes as female."""
        assert decode("420102199001011244").gender == "female"

    def test_age_on_birthday(self):
        """Test that the birthday itself counts as having occurred."""
        assert decode("110101199003077715", today=date(2024, 3, 7)).age == 34

    def test_age_day_before_birthday(self):
        """Test that the day before the birthday is one year younger."""
        assert decode("110101199003077715", today=date(2024, 3, 6)).age == 33

    def test_does_not_verify_checksum(self):
        """Test that decode accepts a number with a wrong checksum."""
        assert decode("110101199003077710").region_code == "110101"

    def test_lowercase_x_accepted(self):
        """Test that a lowercase x is valid for decode."""
        assert decode("11010119900307109x").birth_date == "1990-03-07"

    @pytest.mark.parametrize(
        "number",
        [
            "",
            "11010119900307",
            "1101011990030777A5",
            "110101199003077715X",
            "110101199003077715\n",
            "１１０１０１199003077715",
        ],
    )
    def test_malformed(self, number):
        """Test that malformed numbers raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            decode(number)
        assert exc_info.value.field == "id_card"

    def test_round_trip(self, rng):
        """Test that decode recovers the encoded region code and birth date."""
        for _ in range(200):
            birth_date = random_birth_date(rng)
            number = encode("500229", birth_date, MALE, rng=rng)
            decoded = decode(number)

            assert decoded.region_code == "500229"
            assert decoded.birth_date.replace("-", "") == birth_date
            assert decoded.gender == "male"


class TestCalendar:
    """Tests for leap years, month lengths and birth dates."""

    @pytest.mark.parametrize(
        "year,expected",
        [(2000, True), (1900, False), (2024, True), (2023, False), (2100, False)],
    )
    def test_is_leap_year(self, year, expected):
        """Test the Gregorian leap year rule."""
        assert is_leap_year(year) is expected

    def test_days_in_month(self):
        """Test month lengths including February."""
        assert days_in_month(2000, 2) == 29
        assert days_in_month(1900, 2) == 28
        assert days_in_month(2023, 4) == 30
        assert days_in_month(2023, 12) == 31

    def test_no_feb_29_in_1900(self, rng):
        """Test that 1900 never yields February 29."""
        for _ in range(3000):
            assert birth_date_for_year(1900, rng) != "19000229"

    def test_feb_29_possible_in_2000(self, rng):
        """Test that 2000 can yield February 29 and never February 30."""
        dates = {birth_date_for_year(2000, rng) for _ in range(5000)}

        assert "20000229" in dates
        assert "20000230" not in dates

    def test_random_birth_date_range(self, rng):
        """Test that random birth dates stay in range with real month lengths."""
        for _ in range(500):
            value = random_birth_date(rng)
            year, month, day = int(value[:4]), int(value[4:6]), int(value[6:])

            assert 1950 <= year <= 2005
            assert 1 <= month <= 12
            assert 1 <= day <= days_in_month(year, month)

    def test_calculate_age(self):
        """Test age calculation around the birthday."""
        today = date(2024, 12, 31)
        assert calculate_age(2000, 12, 31, today=today) == 24
        assert calculate_age(2001, 1, 1, today=today) == 23


class TestBirthDateFromAge:
    """Tests for birth_date_from_age."""

    def test_year_from_age(self, rng):
        """Test that the birth year is the current year minus age."""
        value = birth_date_from_age(30, rng, today=date(2024, 6, 1))
        assert value.startswith("1994")

    def test_bounds_accepted(self, rng):
        """Test that ages 0 and 120 are accepted."""
        today = date(2024, 6, 1)
        assert birth_date_from_age(0, rng, today=today).startswith("2024")
        assert birth_date_from_age(120, rng, today=today).startswith("1904")

    @pytest.mark.parametrize("age", [-1, 121, True, "30", 30.5])
    def test_invalid_age(self, rng, age):
        """Test that out-of-range or non-integer ages are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            birth_date_from_age(age, rng)
        assert exc_info.value.field == "age"
