"""
仿真数据生成器基类

所有生成器共享同一个随机数源，固定种子即可复现整条记录。
"""

import random
from abc import ABC
from typing import Optional, Sequence, TypeVar


T = TypeVar("T")


class BaseSyntheticGenerator(ABC):
    """仿真数据生成器基类

    Attributes:
        rng: 随机数源
    """

    def __init__(self, *, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """初始化生成器

        Args:
            rng: 共享的随机数源；未提供时按 seed 新建
            seed: 随机种子（仅在未提供 rng 时使用）
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def _choice(self, items: Sequence[T]) -> T:
        """从序列中随机选择一个元素"""
        return items[self.rng.randrange(len(items))]
