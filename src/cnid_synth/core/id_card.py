"""
身份证号编解码

18 位身份证号结构: 6 位地区码 + 8 位出生日期 (YYYYMMDD) + 3 位顺序码 + 1 位校验码。
顺序码末位奇数为男、偶数为女；校验码按 ISO 7064 MOD 11-2 规则由前 17 位计算。

注意：此处生成的号码仅用于测试和开发，不具备任何法律效力。
"""

import random
import re
from dataclasses import dataclass
from datetime import date
from typing import Literal, Optional

from cnid_synth.core.errors import ValidationError


# 校验码权重
WEIGHTS = [7, 9, 10, 5, 8, 4, 2, 1, 6, 3, 7, 9, 10, 5, 8, 4, 2]

# 校验码对应表（按余数索引）
CHECK_CODES = ["1", "0", "X", "9", "8", "7", "6", "5", "4", "3", "2"]

# 随机出生年份范围
MIN_BIRTH_YEAR = 1950
MAX_BIRTH_YEAR = 2005

MIN_AGE = 0
MAX_AGE = 120

MALE = 1
FEMALE = 0

_REGION_CODE_PATTERN = re.compile(r"[0-9]{6}")
_BIRTH_DATE_PATTERN = re.compile(r"[0-9]{8}")
_ID_NUMBER_PATTERN = re.compile(r"[0-9]{17}[0-9Xx]")

_DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


@dataclass(frozen=True)
class DecodedIdNumber:
    """身份证号解析结果"""
    region_code: str
    birth_year: int
    birth_month: int
    birth_day: int
    age: int
    gender: Literal["male", "female"]

    @property
    def birth_date(self) -> str:
        """出生日期 (YYYY-MM-DD)"""
        return f"{self.birth_year:04d}-{self.birth_month:02d}-{self.birth_day:02d}"


def is_leap_year(year: int) -> bool:
    """判断是否为闰年（能被 4 整除且不能被 100 整除，或能被 400 整除）"""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """获取某年某月的天数"""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def validate_encode_options(
    region_code: Optional[str] = None,
    birth_date: Optional[str] = None,
    gender: Optional[int] = None,
) -> None:
    """校验编码参数，None 表示未提供（跳过校验）

    Raises:
        ValidationError: 地区码不是 6 位数字、出生日期不是 8 位数字或性别不是 0/1
    """
    if region_code is not None and not (isinstance(region_code, str) and _REGION_CODE_PATTERN.fullmatch(region_code)):
        raise ValidationError("地区编码必须是6位数字", field="area_code")

    if birth_date is not None and not (isinstance(birth_date, str) and _BIRTH_DATE_PATTERN.fullmatch(birth_date)):
        raise ValidationError("出生日期必须是8位数字，格式为YYYYMMDD", field="birthday")

    if gender is not None and (isinstance(gender, bool) or gender not in (FEMALE, MALE)):
        raise ValidationError("性别必须是0(女)或1(男)", field="gender")


def compute_checksum(first17: str) -> str:
    """计算校验码

    Args:
        first17: 身份证号前 17 位

    Returns:
        校验码（数字或 X）
    """
    total = 0
    for i in range(17):
        total += int(first17[i]) * WEIGHTS[i]
    return CHECK_CODES[total % 11]


def verify_checksum(number: str) -> bool:
    """验证 18 位身份证号的校验码

    格式不正确时返回 False，不抛出异常。
    """
    if not isinstance(number, str) or not _ID_NUMBER_PATTERN.fullmatch(number):
        return False
    return compute_checksum(number[:17]) == number[17].upper()


def generate_sequence_code(gender: int, rng: random.Random) -> str:
    """生成符合性别要求的 3 位顺序码

    先在 1~999 间随机取数，奇偶与性别不符时男性加 1、女性减 1，
    再限制在范围内（大于 999 取 999，小于 1 取 2）。
    """
    num = rng.randint(1, 999)

    is_odd = num % 2 == 1
    if (gender == MALE and not is_odd) or (gender == FEMALE and is_odd):
        num = num + (1 if gender == MALE else -1)
        if num > 999:
            num = 999
        if num < 1:
            num = 2

    return f"{num:03d}"


def encode(
    region_code: str,
    birth_date: str,
    gender: int,
    *,
    rng: Optional[random.Random] = None,
) -> str:
    """生成 18 位身份证号

    Args:
        region_code: 6 位地区码
        birth_date: 8 位出生日期 YYYYMMDD
        gender: 1 为男，0 为女
        rng: 随机数源（顺序码）

    Returns:
        带校验码的 18 位身份证号

    Raises:
        ValidationError: 参数格式不正确

    Example:
        >>> number = encode("110101", "19900101", 1)
        >>> number[6:14]
        '19900101'
    """
    validate_encode_options(region_code, birth_date, gender)
    if region_code is None or birth_date is None or gender is None:
        raise ValidationError("地区编码、出生日期和性别均不能为空")

    rng = rng or random.Random()
    sequence = generate_sequence_code(gender, rng)
    first17 = f"{region_code}{birth_date}{sequence}"
    return first17 + compute_checksum(first17)


def calculate_age(year: int, month: int, day: int, *, today: Optional[date] = None) -> int:
    """计算周岁：今年生日还没过则减 1"""
    today = today or date.today()
    age = today.year - year
    if (today.month, today.day) < (month, day):
        age -= 1
    return age


def decode(number: str, *, today: Optional[date] = None) -> DecodedIdNumber:
    """解析 18 位身份证号

    只校验格式（长度与各位是否为数字），不校验校验码；需要时请调用 verify_checksum。

    Raises:
        ValidationError: 格式不正确
    """
    if not isinstance(number, str) or not _ID_NUMBER_PATTERN.fullmatch(number):
        raise ValidationError("身份证号必须是18位，前17位为数字，末位为数字或X", field="id_card")

    birth_year = int(number[6:10])
    birth_month = int(number[10:12])
    birth_day = int(number[12:14])

    return DecodedIdNumber(
        region_code=number[:6],
        birth_year=birth_year,
        birth_month=birth_month,
        birth_day=birth_day,
        age=calculate_age(birth_year, birth_month, birth_day, today=today),
        gender="male" if int(number[16]) % 2 == 1 else "female",
    )


def birth_date_for_year(year: int, rng: random.Random) -> str:
    """为指定年份随机生成月、日，返回 YYYYMMDD"""
    month = rng.randint(1, 12)
    day = rng.randint(1, days_in_month(year, month))
    return f"{year:04d}{month:02d}{day:02d}"


def random_birth_date(
    rng: random.Random,
    *,
    min_year: int = MIN_BIRTH_YEAR,
    max_year: int = MAX_BIRTH_YEAR,
) -> str:
    """在 [min_year, max_year] 间随机生成出生日期 YYYYMMDD"""
    return birth_date_for_year(rng.randint(min_year, max_year), rng)


def birth_date_from_age(age: int, rng: random.Random, *, today: Optional[date] = None) -> str:
    """根据年龄生成出生日期（出生年份为今年减去年龄）

    Raises:
        ValidationError: 年龄不在 0~120 之间
    """
    if isinstance(age, bool) or not isinstance(age, int) or not MIN_AGE <= age <= MAX_AGE:
        raise ValidationError("年龄必须在0-120之间", field="age")

    today = today or date.today()
    return birth_date_for_year(today.year - age, rng)
