"""
PinMatch - 启动器模糊匹配引擎

按词有序子序列匹配、排序打分、拼音/首字母回退
"""

__version__ = "0.1.0"

from pinmatch.engine import (
    StringMatcher,
    create_matcher,
    get_matcher,
    update_settings,
    fuzzy_search,
    score_for_pinyin,
    score,
    is_match,
    MatchResult,
    MatchOption,
    MatcherConfig,
    SearchPrecisionScore,
    Alphabet,
    PinyinAlphabet,
)

__all__ = [
    "__version__",
    # 匹配
    "StringMatcher",
    "create_matcher",
    "get_matcher",
    "update_settings",
    "fuzzy_search",
    "score_for_pinyin",
    "score",
    "is_match",
    # 类型与配置
    "MatchResult",
    "MatchOption",
    "MatcherConfig",
    "SearchPrecisionScore",
    # 转写
    "Alphabet",
    "PinyinAlphabet",
]
