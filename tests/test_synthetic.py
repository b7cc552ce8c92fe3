"""Tests for the default field generators."""

import random
import re

import pytest

from cnid_synth.core.synthetic.address_generator import AddressGenerator
from cnid_synth.core.synthetic.email_generator import (
    EMAIL_DOMAINS,
    EmailGenerator,
    name_to_email_prefix,
)
from cnid_synth.core.synthetic.name_generator import (
    COMMON_SURNAMES,
    FEMALE_CHARS,
    MALE_CHARS,
    NameGenerator,
)
from cnid_synth.core.synthetic.phone_generator import (
    ALL_VALID_PREFIXES,
    CHINA_TELECOM_PREFIXES,
    PhoneGenerator,
)
from cnid_synth.utils.validators import validate_phone


RESIDENTIAL_PATTERN = re.compile(r"^[\u4e00-\u9fff]+\d+号楼\d单元\d+室$")
STREET_PATTERN = re.compile(r"^[\u4e00-\u9fff]{2,4}路\d+号$")
COMMERCIAL_PATTERN = re.compile(r"^[\u4e00-\u9fff]+\d+层\d+号$")
EMAIL_PATTERN = re.compile(r"[a-z0-9]+@[a-z0-9.]+\.[a-z]{2,}")


class TestNameGenerator:
    """Tests for NameGenerator."""

    def test_generate_male_name(self):
        """Test that a male name ends with a male character."""
        gen = NameGenerator(seed=1)

        for _ in range(100):
            result = gen.generate(1)
            assert result.synthetic == result.surname + result.given_name
            assert result.surname in COMMON_SURNAMES
            assert result.given_name[-1] in MALE_CHARS

    def test_generate_female_name(self):
        """Test that a female name ends with a female character."""
        gen = NameGenerator(seed=2)

        for _ in range(100):
            assert gen.generate(0).given_name[-1] in FEMALE_CHARS

    def test_default_lengths(self):
        """Test that given names are one or two characters by default."""
        gen = NameGenerator(seed=3)
        lengths = {len(gen.generate(1).given_name) for _ in range(200)}

        assert lengths == {1, 2}

    def test_custom_surnames_and_lengths(self):
        """Test configured surnames and given-name lengths."""
        gen = NameGenerator(surnames=["欧阳"], name_lengths=[2], seed=4)
        result = gen.generate(0)

        assert result.surname == "欧阳"
        assert result.is_compound is True
        assert len(result.given_name) == 2

    def test_no_repeated_last_char(self):
        """Test that the last two characters of a given name differ."""
        gen = NameGenerator(name_lengths=[2], seed=5)

        for _ in range(200):
            given = gen.generate(1).given_name
            assert given[0] != given[1]

    def test_deterministic_with_seed(self):
        """Test that the same seed produces the same names."""
        first = NameGenerator(seed=9)
        second = NameGenerator(seed=9)

        for _ in range(20):
            assert first.generate(1).synthetic == second.generate(1).synthetic


class TestPhoneGenerator:
    """Tests for PhoneGenerator."""

    def test_generate_valid_phone(self):
        """Test that generated numbers are valid mobile numbers."""
        gen = PhoneGenerator(seed=1)

        for _ in range(100):
            result = gen.generate()
            assert len(result.synthetic) == 11
            assert validate_phone(result.synthetic)
            assert result.prefix in ALL_VALID_PREFIXES

    def test_carrier_restriction(self):
        """Test restricting prefixes to one carrier."""
        gen = PhoneGenerator(carrier="telecom", seed=2)

        for _ in range(50):
            result = gen.generate()
            assert result.prefix in CHINA_TELECOM_PREFIXES
            assert result.carrier == "telecom"

    def test_unknown_carrier(self):
        """Test that an unknown carrier raises ValueError."""
        with pytest.raises(ValueError, match="Unknown carrier"):
            PhoneGenerator(carrier="satellite")

    def test_get_carrier(self):
        """Test carrier lookup by prefix."""
        assert PhoneGenerator.get_carrier("13800138000") == "mobile"
        assert PhoneGenerator.get_carrier("18912345678") == "telecom"
        assert PhoneGenerator.get_carrier("12") == "unknown"


class TestEmailGenerator:
    """Tests for EmailGenerator."""

    def test_name_to_prefix(self):
        """Test pinyin conversion of Chinese names."""
        assert name_to_email_prefix("张伟") == "zhangwei"
        assert name_to_email_prefix("李Lei") == "li"

    def test_name_to_prefix_without_chinese(self):
        """Test that names without Chinese characters yield an empty prefix."""
        assert name_to_email_prefix("John") == ""
        assert name_to_email_prefix("") == ""

    def test_generate_from_name(self):
        """Test username and domain of a generated address."""
        gen = EmailGenerator(seed=1)
        result = gen.generate("张伟")

        assert result.username.startswith("zhangwei")
        assert re.fullmatch(r"zhangwei\d{1,3}", result.username)
        assert result.domain in EMAIL_DOMAINS
        assert result.synthetic == f"{result.username}@{result.domain}"
        assert EMAIL_PATTERN.fullmatch(result.synthetic)

    def test_generate_without_chinese_name(self):
        """Test the random syllable fallback."""
        gen = EmailGenerator(seed=2)
        result = gen.generate("")

        assert re.fullmatch(r"[a-z]+\d{1,3}", result.username)
        assert EMAIL_PATTERN.fullmatch(result.synthetic)

    def test_custom_domains(self):
        """Test restricting domains."""
        gen = EmailGenerator(domains=["example.com"], seed=3)
        assert gen.generate("王芳").domain == "example.com"


class TestAddressGenerator:
    """Tests for AddressGenerator."""

    def test_region_prefix(self, small_resolver):
        """Test that the address starts with the region chain."""
        gen = AddressGenerator(small_resolver, seed=1)
        result = gen.generate("420102")

        assert result.region_parts == ["湖北省", "武汉市", "江岸区", "大智街道"]
        assert result.synthetic.startswith("湖北省武汉市江岸区大智街道")
        assert result.synthetic == "".join(result.region_parts) + result.detail

    def test_residential(self, small_resolver):
        """Test residential compound addresses."""
        gen = AddressGenerator(small_resolver, community_ratio=1.0, street_ratio=0.0, seed=2)

        for _ in range(20):
            result = gen.generate("110105")
            assert result.kind == "residential"
            assert RESIDENTIAL_PATTERN.match(result.detail)

    def test_street(self, small_resolver):
        """Test plain street addresses."""
        gen = AddressGenerator(small_resolver, community_ratio=0.0, street_ratio=1.0, seed=3)

        for _ in range(20):
            result = gen.generate("110105")
            assert result.kind == "street"
            assert STREET_PATTERN.match(result.detail)

    def test_commercial(self, small_resolver):
        """Test commercial building addresses."""
        gen = AddressGenerator(small_resolver, community_ratio=0.0, street_ratio=0.0, seed=4)

        for _ in range(20):
            result = gen.generate("110105")
            assert result.kind == "commercial"
            assert COMMERCIAL_PATTERN.match(result.detail)

    def test_room_number_range(self, small_resolver):
        """Test residential room numbers such as 1502 or 2."""
        gen = AddressGenerator(small_resolver, seed=5)

        for _ in range(100):
            room = int(re.search(r"单元(\d+)室", gen.residential_address()).group(1))
            assert room % 100 in (1, 2)
            assert room <= 2902

    def test_unknown_code_uses_random_district(self, small_resolver):
        """Test that an unknown code falls back to a random district and a street."""
        gen = AddressGenerator(small_resolver, community_ratio=1.0, seed=6)
        result = gen.generate("990101")

        assert result.kind == "street"
        assert result.region_parts
        assert result.region_parts[0] in {"北京市", "湖北省", "重庆市"}

    def test_shared_rng(self, small_hierarchy):
        """Test that generators sharing a seeded source are reproducible."""
        from cnid_synth.core.resolver import RegionResolver

        def build():
            rng = random.Random(42)
            return AddressGenerator(RegionResolver(small_hierarchy, rng=rng), rng=rng)

        assert build().generate("110101").synthetic == build().generate("110101").synthetic
