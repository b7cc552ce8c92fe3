"""
仿真数据生成模块

主要组件:
- BaseSyntheticGenerator: 仿真数据生成器基类
- NameGenerator: 中文姓名生成器
- PhoneGenerator: 手机号生成器
- EmailGenerator: 邮箱生成器
- AddressGenerator: 地址生成器
- PersonGenerator: 个人信息生成器
"""

from cnid_synth.core.synthetic.base import BaseSyntheticGenerator
from cnid_synth.core.synthetic.name_generator import NameGenerator
from cnid_synth.core.synthetic.phone_generator import PhoneGenerator
from cnid_synth.core.synthetic.email_generator import EmailGenerator
from cnid_synth.core.synthetic.address_generator import AddressGenerator
from cnid_synth.core.synthetic.generator import PersonGenerator, PersonInfo

__all__ = [
    "BaseSyntheticGenerator",
    "NameGenerator",
    "PhoneGenerator",
    "EmailGenerator",
    "AddressGenerator",
    "PersonGenerator",
    "PersonInfo",
]
