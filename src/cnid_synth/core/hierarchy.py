"""
行政区划层级索引

把参考数据集中的省、市、区县、乡镇四级行政区划装载为不可变的查询结构。

特性:
- 每一级按自身代码建立索引
- 市、区县、乡镇额外按 (上级段, 本级段) 建立索引，因为这些段只在上级内唯一
- 未知代码返回空结果而不是抛出异常
"""

from dataclasses import dataclass
from typing import Optional

from cnid_synth.config.dataset_loader import RegionDataset, RegionRecord


# 直辖市省级代码：北京、天津、上海、重庆
DIRECT_CITIES = frozenset({"11", "12", "31", "50"})

# 不具体的占位区县名称
PLACEHOLDER_DISTRICT = "市辖区"


@dataclass(frozen=True)
class AdministrativeUnit:
    """行政区划单元

    Attributes:
        code: 完整代码（省市区县 6 位，乡镇 9 位）
        name: 名称
        level: province / city / district / town
        parent_code: 上级单元代码，省级为 None
    """
    code: str
    name: str
    level: str
    parent_code: Optional[str] = None

    @property
    def province(self) -> str:
        """省级段（2 位）"""
        return self.code[:2]

    @property
    def city(self) -> str:
        """市级段（2 位）"""
        return self.code[2:4]

    @property
    def area(self) -> str:
        """区县段（2 位）"""
        return self.code[4:6]

    @property
    def town(self) -> str:
        """乡镇段（3 位），非乡镇为空字符串"""
        return self.code[6:9]

    @classmethod
    def from_record(cls, record: RegionRecord) -> "AdministrativeUnit":
        return cls(
            code=record.code,
            name=record.name,
            level=record.level,
            parent_code=record.parent_code,
        )


def is_direct_city(code: str) -> bool:
    """判断代码是否属于直辖市"""
    return code[:2] in DIRECT_CITIES


class AdministrativeHierarchy:
    """行政区划层级索引

    数据装载后不再变化。每个生成器实例持有自己的索引，不在实例间共享。

    Example:
        >>> hierarchy = AdministrativeHierarchy.load(load_dataset())
        >>> hierarchy.province_name("11")
        '北京市'
        >>> hierarchy.city_info("42", "01").name
        '武汉市'
    """

    def __init__(
        self,
        provinces: tuple[AdministrativeUnit, ...],
        cities: tuple[AdministrativeUnit, ...],
        districts: tuple[AdministrativeUnit, ...],
        towns: tuple[AdministrativeUnit, ...],
    ):
        self._provinces = provinces
        self._cities = cities
        self._districts = districts
        self._towns = towns

        # 按省级段索引省份
        self._province_map: dict[str, AdministrativeUnit] = {p.province: p for p in provinces}
        # 按 (省, 市) 索引城市
        self._city_map: dict[tuple[str, str], AdministrativeUnit] = {(c.province, c.city): c for c in cities}
        # 按 (省, 市, 区县) 索引区县
        self._district_map: dict[tuple[str, str, str], AdministrativeUnit] = {
            (d.province, d.city, d.area): d for d in districts
        }

        # 按区县代码归集乡镇，保持数据集顺序
        towns_by_district: dict[str, list[AdministrativeUnit]] = {}
        for t in towns:
            towns_by_district.setdefault(t.parent_code, []).append(t)
        self._town_map: dict[str, tuple[AdministrativeUnit, ...]] = {
            code: tuple(items) for code, items in towns_by_district.items()
        }

        # 全部单元按完整代码索引
        by_code: dict[str, AdministrativeUnit] = {}
        for unit in provinces + cities + districts + towns:
            by_code[unit.code] = unit
        self._by_code = by_code

    @classmethod
    def load(cls, dataset: RegionDataset) -> "AdministrativeHierarchy":
        """从参考数据集构建层级索引

        Args:
            dataset: 已校验的参考数据集

        Returns:
            AdministrativeHierarchy 实例
        """
        return cls(
            provinces=tuple(AdministrativeUnit.from_record(r) for r in dataset.provinces),
            cities=tuple(AdministrativeUnit.from_record(r) for r in dataset.cities),
            districts=tuple(AdministrativeUnit.from_record(r) for r in dataset.districts),
            towns=tuple(AdministrativeUnit.from_record(r) for r in dataset.towns),
        )

    def provinces(self) -> tuple[AdministrativeUnit, ...]:
        return self._provinces

    def cities(self) -> tuple[AdministrativeUnit, ...]:
        return self._cities

    def districts(self) -> tuple[AdministrativeUnit, ...]:
        return self._districts

    def townships(self) -> tuple[AdministrativeUnit, ...]:
        return self._towns

    def province_name(self, province_code: str) -> str:
        """根据省级代码获取省份名称

        Args:
            province_code: 2 位省级段（也接受完整代码）

        Returns:
            省份名称，未知时为空字符串
        """
        province = self._province_map.get(province_code[:2])
        return province.name if province else ""

    def city_info(self, province_code: str, city_code: str) -> Optional[AdministrativeUnit]:
        """根据省级段和市级段获取城市

        Args:
            province_code: 2 位省级段
            city_code: 2 位市级段

        Returns:
            城市单元，未知时为 None
        """
        return self._city_map.get((province_code, city_code))

    def district_info(self, province_code: str, city_code: str, area_code: str) -> Optional[AdministrativeUnit]:
        """根据省、市、区县段获取区县"""
        return self._district_map.get((province_code, city_code, area_code))

    def townships_of(self, district_code: str) -> tuple[AdministrativeUnit, ...]:
        """获取区县下属乡镇街道

        Args:
            district_code: 6 位区县代码

        Returns:
            乡镇单元序列（数据集顺序），没有时为空元组
        """
        return self._town_map.get(district_code, ())

    def districts_in(self, province_code: str, city_code: Optional[str] = None) -> list[AdministrativeUnit]:
        """获取省（或省内某市）下属的全部区县

        Args:
            province_code: 2 位省级段
            city_code: 2 位市级段，None 表示不限制城市
        """
        return [
            d for d in self._districts
            if d.province == province_code and (city_code is None or d.city == city_code)
        ]

    def unit(self, code: str) -> Optional[AdministrativeUnit]:
        """按完整代码查找任意级别的单元"""
        return self._by_code.get(code)

    def __len__(self) -> int:
        return len(self._by_code)

    def __contains__(self, code: object) -> bool:
        return code in self._by_code
