"""
中文姓名生成器

按性别生成逼真的中文姓名。

特性:
- 常见姓氏（基于中国人口统计），可指定姓氏列表
- 按性别选择名字用字
- 名字长度默认 1 字（60%）或 2 字，可指定长度列表
"""

import random
from dataclasses import dataclass
from typing import Optional

from cnid_synth.core.id_card import MALE
from cnid_synth.core.synthetic.base import BaseSyntheticGenerator


# 常见姓氏（按人口比例排序）
COMMON_SURNAMES = [
    # 前20大姓 (占人口约50%)
    "王", "李", "张", "刘", "陈",
    "杨", "黄", "赵", "吴", "周",
    "徐", "孙", "马", "朱", "胡",
    "郭", "何", "高", "林", "罗",
    # 次常见姓氏
    "梁", "宋", "郑", "谢", "韩",
    "唐", "冯", "于", "董", "萧",
    "程", "曹", "袁", "邓", "许",
    "傅", "沈", "曾", "彭", "吕",
    "苏", "卢", "蒋", "蔡", "贾",
    "丁", "魏", "薛", "叶", "阎",
]

# 复姓
COMPOUND_SURNAMES = [
    "欧阳", "太史", "端木", "上官", "司马",
    "东方", "独孤", "南宫", "万俟", "闻人",
    "夏侯", "诸葛", "尉迟", "公羊", "赫连",
    "澹台", "皇甫", "宗政", "濮阳", "公孙",
    "轩辕", "令狐", "钟离", "宇文", "长孙",
    "慕容", "鲜于", "闾丘", "司徒", "司空",
]

# 常见男性用字
MALE_CHARS = [
    "伟", "强", "磊", "洋", "勇", "军", "杰", "涛", "超", "明",
    "刚", "平", "辉", "鹏", "华", "飞", "鑫", "波", "斌", "宇",
    "浩", "博", "昊", "铭", "轩", "睿", "建", "国", "志", "俊",
]

# 常见女性用字
FEMALE_CHARS = [
    "静", "丽", "娟", "燕", "艳", "梅", "玲", "芳", "娜", "敏",
    "洁", "红", "霞", "萍", "婷", "雪", "慧", "颖", "琳", "兰",
    "欣", "怡", "梦", "瑶", "萱", "菲", "琪", "妍", "薇", "倩",
]

# 中性用字
NEUTRAL_CHARS = [
    "子", "晓", "思", "嘉", "雨", "新", "一", "文",
    "云", "月", "星", "天", "可", "安", "宁", "然", "如",
]

# 未指定长度时单字名的比例
SINGLE_CHAR_RATIO = 0.6


@dataclass
class NameGenerationResult:
    """姓名生成结果"""
    synthetic: str
    surname: str
    given_name: str
    is_compound: bool  # 是否复姓


class NameGenerator(BaseSyntheticGenerator):
    """中文姓名生成器

    Example:
        >>> gen = NameGenerator(seed=7)
        >>> result = gen.generate(1)
        >>> result.synthetic == result.surname + result.given_name
        True
    """

    def __init__(
        self,
        *,
        surnames: Optional[list[str]] = None,
        name_lengths: Optional[list[int]] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """初始化姓名生成器

        Args:
            surnames: 指定姓氏列表，None 时使用常见姓氏
            name_lengths: 指定名字长度列表，如 [1, 2]
            rng: 随机数源
            seed: 随机种子
        """
        super().__init__(rng=rng, seed=seed)
        self.surnames = surnames or None
        self.name_lengths = name_lengths or None

    def generate(self, gender: int) -> NameGenerationResult:
        """生成姓名

        Args:
            gender: 1 为男，0 为女

        Returns:
            NameGenerationResult
        """
        surname = self._choice(self.surnames) if self.surnames else self._choice(COMMON_SURNAMES)

        if self.name_lengths:
            length = self._choice(self.name_lengths)
        else:
            length = 1 if self.rng.random() < SINGLE_CHAR_RATIO else 2

        given_name = self._generate_given_name(gender, length)

        return NameGenerationResult(
            synthetic=surname + given_name,
            surname=surname,
            given_name=given_name,
            is_compound=surname in COMPOUND_SURNAMES,
        )

    def _generate_given_name(self, gender: int, length: int) -> str:
        """生成名字：最后一个字按性别选择，其余字从中性用字和性别用字中选择"""
        gendered = MALE_CHARS if gender == MALE else FEMALE_CHARS

        chars = [self._choice(NEUTRAL_CHARS + gendered) for _ in range(length - 1)]
        last = self._choice(gendered)

        # 避免两个字相同
        while chars and last == chars[-1]:
            last = self._choice(gendered)

        chars.append(last)
        return "".join(chars)
