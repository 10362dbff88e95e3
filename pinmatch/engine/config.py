"""
匹配器配置

原先的全局可变设置（搜索精度、拼音开关）收敛为不可变快照，
由宿主程序在设置变更时整体替换。
"""

import os
import dataclasses
from dataclasses import dataclass
from enum import IntEnum


class SearchPrecisionScore(IntEnum):
    """搜索精度预设（最低可接受分数）"""
    REGULAR = 50
    LOW = 20
    NONE = 0


_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def parse_precision(value) -> int:
    """
    解析搜索精度

    支持整数或预设名（regular / low / none），大小写不敏感
    """
    if isinstance(value, int):
        return int(value)

    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass

    try:
        return int(SearchPrecisionScore[text.upper()])
    except KeyError:
        raise ValueError(f"无效的搜索精度: {value!r}") from None


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"无效的布尔值: {value!r}")


@dataclass(frozen=True)
class MatcherConfig:
    """匹配器配置快照（只读）"""

    # 低于该分数的匹配结果 score 置 0
    search_precision: int = int(SearchPrecisionScore.NONE)

    # 拼音匹配开关
    should_use_pinyin: bool = False

    # 超过该长度的文本不做拼音转换
    max_pinyin_length: int = 40

    # 多音字组合上限
    max_pinyin_combinations: int = 256

    def replace(self, **changes) -> "MatcherConfig":
        """返回修改后的新快照"""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, environ=None) -> "MatcherConfig":
        """
        从环境变量读取配置

        PINMATCH_SEARCH_PRECISION: 整数或 regular / low / none
        PINMATCH_USE_PINYIN: 1 / true / yes / on
        """
        environ = os.environ if environ is None else environ
        config = cls()

        precision = environ.get('PINMATCH_SEARCH_PRECISION')
        if precision is not None:
            config = config.replace(search_precision=parse_precision(precision))

        use_pinyin = environ.get('PINMATCH_USE_PINYIN')
        if use_pinyin is not None:
            config = config.replace(should_use_pinyin=parse_bool(use_pinyin))

        return config


@dataclass(frozen=True)
class MatchOption:
    """单次匹配选项"""
    ignore_case: bool = True

    # 高亮前后缀，历史遗留字段，不参与匹配
    prefix: str = ""
    suffix: str = ""


DEFAULT_MATCH_OPTION = MatchOption()
DEFAULT_CONFIG = MatcherConfig()
