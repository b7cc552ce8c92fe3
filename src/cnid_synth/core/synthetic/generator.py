"""
仿真个人信息生成器

组合地区解析、身份证编码和各字段生成器，生成完整的仿真个人信息。

流程:
1. 身份证号: 地区码、出生日期、性别缺省时随机补全后编码
2. 从身份证号解析出生日期和年龄
3. 按性别生成姓名，再生成手机号、以姓名拼音为用户名的邮箱
4. 按身份证地区码生成地址

每个字段都可以通过 register_plugin 注入自定义生成函数，插件失败或结果
不合格时回退到默认生成器。
"""

import random
import threading
import uuid
from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

from cnid_synth.config.dataset_loader import RegionDataset, load_dataset
from cnid_synth.config.settings import GeneratorConfig
from cnid_synth.core import id_card
from cnid_synth.core.errors import ValidationError
from cnid_synth.core.hierarchy import AdministrativeHierarchy
from cnid_synth.core.resolver import RegionResolver
from cnid_synth.core.strategies import PluginRegistry, PluginType
from cnid_synth.core.synthetic.address_generator import AddressGenerator
from cnid_synth.core.synthetic.email_generator import EmailGenerator
from cnid_synth.core.synthetic.name_generator import NameGenerator
from cnid_synth.core.synthetic.phone_generator import PhoneGenerator
from cnid_synth.logging.setup import batch_context, get_logger

logger = get_logger(__name__)


# 批量生成时每批最多处理的条数
BATCH_CHUNK_SIZE = 1000

GENDER_LABELS = {id_card.MALE: "男", id_card.FEMALE: "女"}


@dataclass
class PersonInfo:
    """仿真个人信息"""
    name: str
    gender: str  # 男 / 女
    age: int
    birth_date: str  # YYYY-MM-DD
    id_card: str
    phone: str
    email: str
    address: str
    area_name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class PersonGenerator:
    """仿真个人信息生成器

    每个实例独占随机数源、层级索引和解析缓存，实例之间互不影响。

    Example:
        >>> gen = PersonGenerator(seed=42)
        >>> person = gen.generate_person_info_by_area_and_age("武汉", 30)
        >>> person.id_card[:4]
        '4201'
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        *,
        dataset: Optional[RegionDataset] = None,
        seed: Optional[int] = None,
    ):
        """初始化生成器

        Args:
            config: 生成器配置，None 时使用默认配置
            dataset: 行政区划数据集，None 时按配置加载（默认使用内置数据）
            seed: 随机种子，固定后生成结果可复现
        """
        self.config = config or GeneratorConfig()
        self.rng = random.Random(seed)
        self.plugins = PluginRegistry()

        self._dataset = dataset
        self._resolver: Optional[RegionResolver] = None
        self._init_lock = threading.Lock()

        self.name_generator = NameGenerator(
            surnames=self.config.surnames,
            name_lengths=self.config.name_lengths,
            rng=self.rng,
        )
        self.phone_generator = PhoneGenerator(rng=self.rng)
        self.email_generator = EmailGenerator(rng=self.rng)
        self._address_generator: Optional[AddressGenerator] = None

        if not self.config.lazy_load:
            self._ensure_initialized()

    def _ensure_initialized(self) -> None:
        """装载数据集并构建索引（只执行一次）"""
        if self._resolver is not None:
            return
        with self._init_lock:
            if self._resolver is not None:
                return

            dataset = self._dataset or load_dataset(self.config.dataset_path)
            hierarchy = AdministrativeHierarchy.load(dataset)
            resolver = RegionResolver(
                hierarchy,
                rng=self.rng,
                common_cities=self.config.common_cities,
                precompute_fuzzy_match=self.config.precompute_fuzzy_match,
            )
            self._address_generator = AddressGenerator(
                resolver,
                community_ratio=self.config.community_ratio,
                street_ratio=self.config.street_ratio,
                building_ratio=self.config.building_ratio,
                rng=self.rng,
            )
            self._resolver = resolver

            logger.info(
                "Region data loaded",
                extra={"source": dataset.source, "units": len(hierarchy)},
            )

    @property
    def resolver(self) -> RegionResolver:
        self._ensure_initialized()
        return self._resolver

    @property
    def address_generator(self) -> AddressGenerator:
        self._ensure_initialized()
        return self._address_generator

    # ------------------------------------------------------------------
    # 插件
    # ------------------------------------------------------------------

    def register_plugin(self, kind: PluginType | str, plugin: Callable[..., Any]) -> None:
        """注册字段插件

        Args:
            kind: name_generator / phone_generator / email_generator /
                  address_generator / id_card_generator
            plugin: 生成函数

        Raises:
            ValueError: 插件类型不支持或插件不可调用
        """
        self.plugins.register(kind, plugin)

    def remove_plugin(self, kind: PluginType | str) -> None:
        """移除字段插件"""
        self.plugins.remove(kind)

    # ------------------------------------------------------------------
    # 身份证号
    # ------------------------------------------------------------------

    def generate_id_card(
        self,
        area_code: Optional[str] = None,
        birthday: Optional[str] = None,
        gender: Optional[int] = None,
    ) -> str:
        """生成身份证号，未提供的参数随机补全

        Args:
            area_code: 6 位地区码
            birthday: 出生日期 YYYYMMDD
            gender: 1 为男，0 为女

        Raises:
            ValidationError: 参数格式不正确
        """
        id_card.validate_encode_options(area_code, birthday, gender)

        if area_code is None:
            area_code = self.resolver.random_district_code()
        if birthday is None:
            birthday = id_card.random_birth_date(self.rng)
        if gender is None:
            gender = self._random_gender()

        return id_card.encode(area_code, birthday, gender, rng=self.rng)

    def _random_gender(self) -> int:
        return self.rng.randint(id_card.FEMALE, id_card.MALE)

    # ------------------------------------------------------------------
    # 个人信息
    # ------------------------------------------------------------------

    def generate_person_info(
        self,
        area_code: Optional[str] = None,
        birthday: Optional[str] = None,
        gender: Optional[int] = None,
    ) -> PersonInfo:
        """生成完整的个人信息

        Raises:
            ValidationError: 参数格式不正确
        """
        id_card.validate_encode_options(area_code, birthday, gender)
        if gender is None:
            gender = self._random_gender()

        number = self.plugins.run(
            PluginType.ID_CARD,
            lambda: self.generate_id_card(area_code, birthday, gender),
            area_code=area_code,
            birthday=birthday,
            gender=gender,
        )
        decoded = id_card.decode(number)

        name = self.plugins.run(
            PluginType.NAME,
            lambda: self.name_generator.generate(gender).synthetic,
            gender,
        )
        phone = self.plugins.run(
            PluginType.PHONE,
            lambda: self.phone_generator.generate().synthetic,
        )
        email = self.plugins.run(
            PluginType.EMAIL,
            lambda: self.email_generator.generate(name).synthetic,
            name,
        )

        region_code = decoded.region_code
        area_name = self.resolver.area_name(region_code)
        address = self.plugins.run(
            PluginType.ADDRESS,
            lambda: self.address_generator.generate(region_code).synthetic,
            region_code,
            area_name,
        )

        return PersonInfo(
            name=name,
            gender=GENDER_LABELS[gender],
            age=decoded.age,
            birth_date=decoded.birth_date,
            id_card=number,
            phone=phone,
            email=email,
            address=address,
            area_name=area_name,
        )

    def generate_person_info_by_area_and_age(
        self,
        area_name: str,
        age: int,
        *,
        gender: Optional[int] = None,
    ) -> PersonInfo:
        """按地区名称和年龄生成个人信息

        地区名称无法解析时使用配置中的默认地区码；解析到市级代码时随机
        落到下属区县。

        Args:
            area_name: 地区名称，如 "武汉"、"上海"、"朝阳区"
            age: 年龄 0~120
            gender: 1 为男，0 为女，None 时随机

        Raises:
            ValidationError: 地区名称为空或年龄超出范围
        """
        if not isinstance(area_name, str) or not area_name.strip():
            raise ValidationError("地区名称不能为空", field="area_name")

        birthday = id_card.birth_date_from_age(age, self.rng)

        area_code = self.resolver.code_for_name(area_name)
        if area_code is None:
            area_code = self.config.fallback_area_code
            logger.warning(
                "Area name not found, using fallback area code",
                extra={"area_name": area_name, "fallback_area_code": area_code},
            )

        area_code = self.resolver.resolve_to_district(area_code)

        return self.generate_person_info(area_code=area_code, birthday=birthday, gender=gender)

    def generate_batch(
        self,
        count: int,
        *,
        area_code: Optional[str] = None,
        birthday: Optional[str] = None,
        gender: Optional[int] = None,
        progress_callback: Optional[Callable[[float], None]] = None,
    ) -> list[PersonInfo]:
        """批量生成个人信息

        每批最多处理 1000 条，每批完成后以 0~1 的进度调用 progress_callback。

        Args:
            count: 生成数量（正整数）
            area_code: 6 位地区码，None 时每条随机
            birthday: 出生日期 YYYYMMDD，None 时每条随机
            gender: 1 为男，0 为女，None 时每条随机
            progress_callback: 进度回调

        Raises:
            ValidationError: 数量不是正整数或其他参数格式不正确
        """
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValidationError("生成数量必须是正整数", field="count")
        id_card.validate_encode_options(area_code, birthday, gender)

        self._ensure_initialized()

        chunk_size = min(count, BATCH_CHUNK_SIZE)
        chunks = (count + chunk_size - 1) // chunk_size

        result: list[PersonInfo] = []
        with batch_context(uuid.uuid4().hex[:12]):
            logger.info("Batch generation started", extra={"count": count})

            for chunk_index in range(chunks):
                current = min(chunk_size, count - chunk_index * chunk_size)
                for _ in range(current):
                    result.append(
                        self.generate_person_info(area_code=area_code, birthday=birthday, gender=gender)
                    )

                if progress_callback is not None:
                    progress_callback(min((chunk_index + 1) * chunk_size / count, 1))

            logger.info("Batch generation finished", extra={"count": len(result)})
        return result
