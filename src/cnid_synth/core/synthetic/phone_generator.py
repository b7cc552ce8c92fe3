"""
手机号生成器

使用真实运营商号段生成中国大陆手机号。
"""

import random
from dataclasses import dataclass
from typing import Literal, Optional

from cnid_synth.core.synthetic.base import BaseSyntheticGenerator


# 中国移动号段
CHINA_MOBILE_PREFIXES = [
    "134", "135", "136", "137", "138", "139",
    "147", "148",
    "150", "151", "152",
    "157", "158", "159",
    "172",
    "178", "182", "183", "184",
    "187", "188",
    "195", "197", "198",
]

# 中国联通号段
CHINA_UNICOM_PREFIXES = [
    "130", "131", "132",
    "145", "146",
    "155", "156",
    "166",
    "175", "176",
    "185", "186",
    "196",
]

# 中国电信号段
CHINA_TELECOM_PREFIXES = [
    "133", "149", "153", "173", "177", "180", "181", "189",
    "190", "191", "193", "199",
]

# 中国广电号段
CHINA_BROADCASTING_PREFIXES = [
    "192",
]

CARRIER_PREFIXES = {
    "mobile": CHINA_MOBILE_PREFIXES,
    "unicom": CHINA_UNICOM_PREFIXES,
    "telecom": CHINA_TELECOM_PREFIXES,
    "broadcasting": CHINA_BROADCASTING_PREFIXES,
}

ALL_VALID_PREFIXES = (
    CHINA_MOBILE_PREFIXES +
    CHINA_UNICOM_PREFIXES +
    CHINA_TELECOM_PREFIXES +
    CHINA_BROADCASTING_PREFIXES
)

# 号段归属映射
PREFIX_TO_CARRIER = {
    prefix: carrier
    for carrier, prefixes in CARRIER_PREFIXES.items()
    for prefix in prefixes
}

Carrier = Literal["mobile", "unicom", "telecom", "broadcasting"]


@dataclass
class PhoneGenerationResult:
    """手机号生成结果"""
    synthetic: str
    prefix: str
    carrier: Carrier


class PhoneGenerator(BaseSyntheticGenerator):
    """中国手机号生成器

    Example:
        >>> gen = PhoneGenerator(seed=1)
        >>> len(gen.generate().synthetic)
        11
    """

    def __init__(
        self,
        *,
        carrier: Optional[Carrier] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """初始化手机号生成器

        Args:
            carrier: 限定运营商，None 表示任意运营商
            rng: 随机数源
            seed: 随机种子
        """
        super().__init__(rng=rng, seed=seed)
        if carrier is not None and carrier not in CARRIER_PREFIXES:
            raise ValueError(f"Unknown carrier: {carrier}")
        self.carrier = carrier

    def generate(self) -> PhoneGenerationResult:
        """生成手机号"""
        candidates = CARRIER_PREFIXES[self.carrier] if self.carrier else ALL_VALID_PREFIXES
        prefix = self._choice(candidates)
        suffix = "".join(str(self.rng.randint(0, 9)) for _ in range(8))

        return PhoneGenerationResult(
            synthetic=prefix + suffix,
            prefix=prefix,
            carrier=PREFIX_TO_CARRIER[prefix],
        )

    @staticmethod
    def get_carrier(phone: str) -> str:
        """获取手机号所属运营商 (mobile/unicom/telecom/broadcasting/unknown)"""
        if len(phone) >= 3:
            return PREFIX_TO_CARRIER.get(phone[:3], "unknown")
        return "unknown"
