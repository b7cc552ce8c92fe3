"""
地区名称解析器

把用户输入的地区名称解析为 6 位行政区划代码，并支持反向查询代码对应的名称层级。

解析顺序（前一级未命中才尝试下一级）:
1. 精确匹配: 名称索引（完整名称与简称）
2. 常用城市: 固定的城市简称表
3. 模糊匹配: 前缀索引（输入不超过 3 个字），然后逐字包含索引

模糊匹配总是返回插入顺序中的第一个候选，结果确定但不做相关度排序。
"""

import random
import re
import threading
from dataclasses import dataclass, field
from typing import Optional

from cnid_synth.config.settings import DEFAULT_COMMON_CITIES
from cnid_synth.core.hierarchy import (
    PLACEHOLDER_DISTRICT,
    AdministrativeHierarchy,
    is_direct_city,
)
from cnid_synth.logging.setup import get_logger

logger = get_logger(__name__)


# 市级（或省级）代码：最后两位为 00
MUNICIPAL_CODE_PATTERN = re.compile(r"[0-9]{4}00")

# 前缀索引的最大前缀长度
MAX_PREFIX_LENGTH = 3

UNKNOWN_AREA_NAME = "未知地区"


class RegionCodeIndex:
    """名称与代码的双向索引

    正向（名称 → 代码）先写入者优先，反向（代码 → 名称）保留最后一次写入，
    即单元自身的简称。
    """

    def __init__(self) -> None:
        self._code_by_name: dict[str, str] = {}
        self._name_by_code: dict[str, str] = {}

    def add(self, code: str, name: str) -> None:
        """添加一条双向映射"""
        if name not in self._code_by_name:
            self._code_by_name[name] = code
        self._name_by_code[code] = name

    def code_for(self, name: str) -> Optional[str]:
        return self._code_by_name.get(name)

    def name_for(self, code: str) -> Optional[str]:
        return self._name_by_code.get(code)

    def items(self):
        """按插入顺序遍历 (名称, 代码)"""
        return self._code_by_name.items()

    def codes(self) -> set[str]:
        return set(self._name_by_code)

    def __len__(self) -> int:
        return len(self._code_by_name)

    @classmethod
    def build(cls, hierarchy: AdministrativeHierarchy) -> "RegionCodeIndex":
        """从已完整装载的层级索引构建名称索引

        遍历顺序为省 → 市 → 区县。市与区县同时写入带上级前缀的完整名称和简称。
        """
        index = cls()

        for province in hierarchy.provinces():
            index.add(province.code, province.name)

        for city in hierarchy.cities():
            province_name = hierarchy.province_name(city.province)
            index.add(city.code, f"{province_name}{city.name}")
            index.add(city.code, city.name)

        for district in hierarchy.districts():
            province_name = hierarchy.province_name(district.province)
            city = hierarchy.city_info(district.province, district.city)
            city_name = city.name if city else ""
            index.add(district.code, f"{province_name}{city_name}{district.name}")
            index.add(district.code, district.name)

        return index


@dataclass(frozen=True)
class FuzzyMatchIndex:
    """模糊匹配索引

    Attributes:
        prefix: 名称前 1~3 个字 → 代码序列（插入顺序，去重）
        include_char: 单个字 → 代码序列（插入顺序，去重）
    """
    prefix: dict[str, tuple[str, ...]]
    include_char: dict[str, tuple[str, ...]]

    @classmethod
    def build(cls, index: RegionCodeIndex) -> "FuzzyMatchIndex":
        prefix: dict[str, dict[str, None]] = {}
        include_char: dict[str, dict[str, None]] = {}

        for name, code in index.items():
            # 只对长度大于 1 的名称构建前缀索引
            if len(name) > 1:
                for i in range(1, min(len(name), MAX_PREFIX_LENGTH) + 1):
                    prefix.setdefault(name[:i], {}).setdefault(code, None)

            for char in name:
                include_char.setdefault(char, {}).setdefault(code, None)

        return cls(
            prefix={key: tuple(codes) for key, codes in prefix.items()},
            include_char={key: tuple(codes) for key, codes in include_char.items()},
        )


@dataclass
class ResolverCache:
    """解析器的派生缓存，每个解析器实例独占"""
    fuzzy_index: Optional[FuzzyMatchIndex] = None
    random_area_codes: Optional[tuple[str, ...]] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class RegionResolver:
    """地区名称解析器

    Example:
        >>> resolver = RegionResolver(hierarchy)
        >>> resolver.code_for_name("东城区")
        '110101'
        >>> resolver.code_for_name("北京")
        '110000'
        >>> resolver.resolve_to_district("110000")  # 随机选择一个区县
        '110105'
    """

    def __init__(
        self,
        hierarchy: AdministrativeHierarchy,
        *,
        rng: Optional[random.Random] = None,
        common_cities: Optional[dict[str, str]] = None,
        precompute_fuzzy_match: bool = False,
    ):
        """初始化解析器

        Args:
            hierarchy: 已装载的行政区划层级索引
            rng: 随机数源（区县选择、乡镇选择）
            common_cities: 常用城市简称表，None 时使用默认表
            precompute_fuzzy_match: 是否立即构建模糊匹配索引
        """
        self.hierarchy = hierarchy
        self.rng = rng or random.Random()
        self.common_cities = dict(common_cities if common_cities is not None else DEFAULT_COMMON_CITIES)
        self.index = RegionCodeIndex.build(hierarchy)
        self.cache = ResolverCache()

        logger.debug(
            "Region index built",
            extra={"names": len(self.index), "units": len(hierarchy)},
        )

        if precompute_fuzzy_match:
            self.fuzzy_index()

    def fuzzy_index(self) -> FuzzyMatchIndex:
        """获取模糊匹配索引，首次调用时构建"""
        if self.cache.fuzzy_index is None:
            with self.cache.lock:
                if self.cache.fuzzy_index is None:
                    self.cache.fuzzy_index = FuzzyMatchIndex.build(self.index)
                    logger.debug(
                        "Fuzzy match index built",
                        extra={
                            "prefixes": len(self.cache.fuzzy_index.prefix),
                            "chars": len(self.cache.fuzzy_index.include_char),
                        },
                    )
        return self.cache.fuzzy_index

    def code_for_name(self, name: str) -> Optional[str]:
        """根据地区名称获取区划代码

        Args:
            name: 地区名称，如 "武汉"、"朝阳区"、"湖北省武汉市"

        Returns:
            区划代码，所有匹配层级都未命中时为 None
        """
        if not name:
            return None

        # 1. 精确匹配
        code = self.index.code_for(name)
        if code:
            return code

        # 2. 常用城市
        code = self.common_cities.get(name)
        if code:
            return code

        # 3. 模糊匹配
        fuzzy = self.fuzzy_index()

        if len(name) <= MAX_PREFIX_LENGTH:
            matches = fuzzy.prefix.get(name)
            if matches:
                return matches[0]

        for char in name:
            matches = fuzzy.include_char.get(char)
            if matches:
                return matches[0]

        return None

    def name_for_code(self, code: str) -> Optional[str]:
        """根据区划代码获取名称（不做模糊匹配）"""
        return self.index.name_for(code)

    def area_name(self, code: str) -> str:
        """获取用于展示的地区名称，未知时为 "未知地区" """
        return self.name_for_code(code) or UNKNOWN_AREA_NAME

    def hierarchy_chain(self, district_code: str) -> list[str]:
        """获取区划代码对应的名称层级

        依次为省、市（直辖市省略）、区县、随机一个乡镇街道。后一级名称中
        与前面重复的省名、市名会被去掉，去掉后为空则省略该级。

        Args:
            district_code: 6 位区划代码

        Returns:
            名称片段列表，如 ["湖北省", "武汉市", "江岸区", "大智街道"]
        """
        code = district_code[:6]
        direct = is_direct_city(code)

        province_name = self.name_for_code(code[:2] + "0000")
        city_name = self.name_for_code(code[:4] + "00")
        district_name = self.name_for_code(code)

        result: list[str] = []

        if province_name:
            result.append(province_name)

        simple_city_name = ""
        if not direct and city_name:
            simple_city_name = city_name.replace(province_name or "", "")
            if simple_city_name:
                result.append(simple_city_name)

        if district_name:
            simple_district_name = district_name
            if province_name:
                simple_district_name = simple_district_name.replace(province_name, "")
            if simple_city_name:
                simple_district_name = simple_district_name.replace(simple_city_name, "")
            if simple_district_name and simple_district_name != PLACEHOLDER_DISTRICT:
                result.append(simple_district_name)

        towns = self.hierarchy.townships_of(code)
        if towns:
            result.append(self.rng.choice(towns).name)

        return result

    def resolve_to_district(self, code: str) -> str:
        """把市级（或直辖市省级）代码随机落到一个下属区县

        直辖市只按省级段匹配区县，普通城市按省级段和市级段匹配。名称为
        "市辖区" 的区县不参与选择。没有候选或代码已是区县级时原样返回。

        Args:
            code: 6 位区划代码

        Returns:
            区县代码
        """
        if not MUNICIPAL_CODE_PATTERN.fullmatch(code):
            return code

        province_code = code[:2]
        if is_direct_city(code):
            candidates = self.hierarchy.districts_in(province_code)
        else:
            candidates = self.hierarchy.districts_in(province_code, code[2:4])

        candidates = [d for d in candidates if d.name != PLACEHOLDER_DISTRICT]
        if not candidates:
            return code

        return self.rng.choice(candidates).code

    def random_district_code(self) -> str:
        """随机选择一个区县级代码"""
        if self.cache.random_area_codes is None:
            with self.cache.lock:
                if self.cache.random_area_codes is None:
                    self.cache.random_area_codes = tuple(
                        d.code for d in self.hierarchy.districts() if not d.code.endswith("00")
                    )
        return self.rng.choice(self.cache.random_area_codes)
