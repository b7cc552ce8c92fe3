"""
邮箱生成器

以姓名拼音为用户名生成邮箱地址，如 "张伟" -> "zhangwei123@163.com"。
"""

import random
import re
from dataclasses import dataclass
from typing import Optional

from pypinyin import lazy_pinyin

from cnid_synth.core.synthetic.base import BaseSyntheticGenerator


# 常见邮箱域名
EMAIL_DOMAINS = [
    "qq.com", "163.com", "gmail.com", "126.com",
    "outlook.com", "sina.com", "sohu.com",
]

# 姓名无法转换为拼音时用于拼接用户名的音节
PINYIN_SYLLABLES = [
    "an", "bai", "bao", "bei", "bo", "chen", "cheng", "chun", "da", "dong",
    "fang", "fei", "feng", "gang", "guo", "hai", "hao", "hong", "hua", "hui",
    "jia", "jian", "jie", "jin", "jun", "kai", "lan", "lei", "li", "lin",
    "ling", "long", "mei", "min", "ming", "na", "ning", "ping", "qiang", "qing",
    "rui", "shan", "tao", "tian", "wei", "wen", "xia", "xin", "xue", "yan",
    "yang", "yi", "ying", "yu", "yun", "zhen", "zhi", "zhong", "zi",
]

_NON_CHINESE = re.compile(r"[^\u4e00-\u9fff]")
_NON_ASCII_LETTER = re.compile(r"[^a-z]")


@dataclass
class EmailGenerationResult:
    """邮箱生成结果"""
    synthetic: str
    username: str
    domain: str


def name_to_email_prefix(name: str) -> str:
    """把中文姓名转换为小写拼音，如 "张三" -> "zhangsan"

    非中文字符会被去掉，无法转换时返回空字符串。
    """
    if not name or not isinstance(name, str):
        return ""
    chinese = _NON_CHINESE.sub("", name)
    if not chinese:
        return ""
    return _NON_ASCII_LETTER.sub("", "".join(lazy_pinyin(chinese)).lower())


class EmailGenerator(BaseSyntheticGenerator):
    """邮箱地址生成器

    Example:
        >>> gen = EmailGenerator(seed=3)
        >>> gen.generate("张伟").username.startswith("zhangwei")
        True
    """

    def __init__(
        self,
        *,
        domains: Optional[list[str]] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """初始化邮箱生成器

        Args:
            domains: 自定义域名列表
            rng: 随机数源
            seed: 随机种子
        """
        super().__init__(rng=rng, seed=seed)
        self.domains = domains or EMAIL_DOMAINS

    def generate(self, name: str) -> EmailGenerationResult:
        """根据姓名生成邮箱

        Args:
            name: 中文姓名

        Returns:
            EmailGenerationResult
        """
        prefix = name_to_email_prefix(name) or self._random_word()
        username = f"{prefix}{self.rng.randint(0, 999)}"
        domain = self._choice(self.domains)

        return EmailGenerationResult(
            synthetic=f"{username}@{domain}",
            username=username,
            domain=domain,
        )

    def _random_word(self) -> str:
        """拼接 2~3 个音节作为用户名"""
        count = self.rng.randint(2, 3)
        return "".join(self._choice(PINYIN_SYLLABLES) for _ in range(count))
