"""
地址生成器

地址由行政区划层级（省、市、区县、乡镇街道）加详细地址组成。详细地址按比例
在三种格式中选择:
- 住宅小区: 万科花园12号楼3单元1502室
- 普通街道: 长兴路318号
- 商业建筑: 国际中心15层6号
"""

import random
from dataclasses import dataclass
from typing import Literal, Optional

from cnid_synth.core.resolver import RegionResolver
from cnid_synth.core.synthetic.base import BaseSyntheticGenerator


COMMUNITY_PREFIXES = [
    "龙湖", "万科", "恒大", "碧桂园", "保利", "绿地", "华润", "中海", "金地", "招商",
    "融创", "世茂", "富力", "雅居乐", "远洋", "旭辉", "金茂", "华夏", "阳光", "和谐",
]
COMMUNITY_SUFFIXES = [
    "花园", "小区", "家园", "公馆", "华府", "名苑", "御景", "豪庭", "新城", "康城",
    "雅苑", "佳园", "丽都", "天地", "世家", "水岸", "翠园", "尚城", "名都", "御府",
]

BUILDING_PREFIXES = [
    "国际", "环球", "中央", "东方", "西部", "南方", "北方", "万达", "嘉禾", "金融",
    "商贸", "科技", "数字", "创新", "未来", "时代", "世纪", "和平", "兴盛", "繁华",
]
BUILDING_SUFFIXES = ["广场", "中心", "大厦", "商城", "大楼", "商务楼", "写字楼"]

# 街道名用字
STREET_CHARS = [
    "长", "兴", "和", "平", "安", "康", "建", "设", "人", "民",
    "解", "放", "中", "山", "新", "华", "光", "明", "东", "西",
    "南", "北", "文", "化", "胜", "利", "振", "阳", "春", "江",
]

AddressKind = Literal["residential", "street", "commercial"]


@dataclass
class AddressGenerationResult:
    """地址生成结果"""
    synthetic: str
    region_parts: list[str]
    detail: str
    kind: AddressKind


class AddressGenerator(BaseSyntheticGenerator):
    """地址生成器

    Example:
        >>> gen = AddressGenerator(resolver, seed=5)
        >>> gen.generate("420102").synthetic.startswith("湖北省武汉市江岸区")
        True
    """

    def __init__(
        self,
        resolver: RegionResolver,
        *,
        community_ratio: float = 0.6,
        street_ratio: float = 0.3,
        building_ratio: float = 0.1,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """初始化地址生成器

        Args:
            resolver: 地区解析器（提供名称层级）
            community_ratio: 住宅小区地址比例
            street_ratio: 普通街道地址比例
            building_ratio: 商业建筑地址比例（其余比例均落入此类）
            rng: 随机数源
            seed: 随机种子
        """
        super().__init__(rng=rng, seed=seed)
        self.resolver = resolver
        self.community_ratio = community_ratio
        self.street_ratio = street_ratio
        self.building_ratio = building_ratio

    def generate(self, area_code: str) -> AddressGenerationResult:
        """根据区划代码生成地址

        区划代码未知时，随机选择一个区县并使用街道地址。
        """
        if self.resolver.name_for_code(area_code) is None:
            parts = self.resolver.hierarchy_chain(self.resolver.random_district_code())
            kind: AddressKind = "street"
            detail = self.street_address()
        else:
            parts = self.resolver.hierarchy_chain(area_code)
            kind, detail = self.detailed_address()

        return AddressGenerationResult(
            synthetic="".join(parts) + detail,
            region_parts=parts,
            detail=detail,
            kind=kind,
        )

    def detailed_address(self) -> tuple[AddressKind, str]:
        """按比例生成详细地址"""
        roll = self.rng.random()
        if roll < self.community_ratio:
            return "residential", self.residential_address()
        if roll < self.community_ratio + self.street_ratio:
            return "street", self.street_address()
        return "commercial", self.commercial_address()

    def community_name(self) -> str:
        return self._choice(COMMUNITY_PREFIXES) + self._choice(COMMUNITY_SUFFIXES)

    def building_name(self) -> str:
        return self._choice(BUILDING_PREFIXES) + self._choice(BUILDING_SUFFIXES)

    def residential_address(self) -> str:
        building_no = self.rng.randint(1, 30)
        unit_no = self.rng.randint(1, 6)
        room_no = self.rng.randint(1, 2) + self.rng.randint(0, 29) * 100
        return f"{self.community_name()}{building_no}号楼{unit_no}单元{room_no}室"

    def street_address(self) -> str:
        length = self.rng.randint(2, 4)
        street = "".join(self._choice(STREET_CHARS) for _ in range(length))
        return f"{street}路{self.rng.randint(1, 1000)}号"

    def commercial_address(self) -> str:
        floor_no = self.rng.randint(1, 20)
        room_no = self.rng.randint(1, 10)
        return f"{self.building_name()}{floor_no}层{room_no}号"
