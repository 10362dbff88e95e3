"""
拼音转写

匹配器只依赖 Alphabet 接口：
- contains_ideographic: 文本是否含有可转写的汉字
- combinations: 文本所有可能的拼音组合（多音字展开）
- acronym: 拼音组合的首字母缩写

PinyinAlphabet 基于 pypinyin 实现该接口。
"""

from functools import lru_cache
from itertools import islice, product
from typing import Sequence, Tuple

from pypinyin import Style, pinyin
from pypinyin.pinyin_dict import pinyin_dict

from .logging import get_matcher_logger

logger = get_matcher_logger()

Syllables = Tuple[str, ...]


class Alphabet:
    """转写接口，由宿主程序提供实现"""

    def contains_ideographic(self, text: str) -> bool:
        raise NotImplementedError

    def combinations(self, text: str) -> Sequence[Syllables]:
        raise NotImplementedError

    def acronym(self, syllables: Sequence[str]) -> str:
        """首字母缩写，如 ('qq', 'yin', 'yue') -> 'qyy'"""
        return ''.join(s[0] for s in syllables if s)


def has_reading(char: str) -> bool:
    """字符在 pypinyin 字典中是否有读音"""
    return ord(char) in pinyin_dict


class PinyinAlphabet(Alphabet):
    """
    pypinyin 转写实现

    - 逐字转写，非汉字原样保留为一个音节
    - 多音字展开为笛卡尔积，数量超过上限时截断
    - 同一文本的组合结果按 LRU 缓存
    """

    def __init__(
        self,
        max_length: int = 40,
        max_combinations: int = 256,
        cache_size: int = 4096,
    ):
        self.max_length = max_length
        self.max_combinations = max_combinations
        self._combinations = lru_cache(maxsize=cache_size)(self._build_combinations)

    def contains_ideographic(self, text: str) -> bool:
        # 过长文本不做转写
        if not text or len(text) > self.max_length:
            return False
        return any(has_reading(c) for c in text)

    def combinations(self, text: str) -> Tuple[Syllables, ...]:
        if not text:
            return ()
        return self._combinations(text)

    def readings(self, char: str) -> Syllables:
        """单字的全部无调读音（去重，保持顺序）"""
        if not has_reading(char):
            return (char,)
        readings = pinyin(char, style=Style.NORMAL, heteronym=True)[0]
        return tuple(dict.fromkeys(r for r in readings if r)) or (char,)

    def _build_combinations(self, text: str) -> Tuple[Syllables, ...]:
        per_char = [self.readings(c) for c in text]
        combos = tuple(islice(product(*per_char), self.max_combinations))

        total = 1
        for readings in per_char:
            total *= len(readings)
        if total > len(combos):
            logger.debug(f"拼音组合截断: '{text}' 共 {total} 种, 保留 {len(combos)} 种")

        return combos
