"""
cnid-synth: synthetic Chinese identity records

Generates checksum-valid resident identity numbers and matching synthetic
person records (name, phone, e-mail, address) for test fixtures.
"""

__version__ = "0.1.0"

from cnid_synth.core.errors import ValidationError
from cnid_synth.core.resolver import RegionResolver
from cnid_synth.core.synthetic.generator import PersonGenerator, PersonInfo

__all__ = [
    "PersonGenerator",
    "PersonInfo",
    "RegionResolver",
    "ValidationError",
]
