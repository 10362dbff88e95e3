from .config import (
    MatcherConfig,
    MatchOption,
    SearchPrecisionScore,
    DEFAULT_MATCH_OPTION,
    parse_precision,
    parse_bool,
)
from .result import MatchResult
from .scoring import calculate_search_score
from .alphabet import Alphabet, PinyinAlphabet
from .matcher import (
    StringMatcher,
    get_matcher,
    update_settings,
    fuzzy_search,
    score_for_pinyin,
    score,
    is_match,
)
from .logging import setup_logging, get_logger, get_api_logger, get_matcher_logger, log_execution_time


def create_matcher(config: MatcherConfig = None, alphabet: Alphabet = None) -> StringMatcher:
    """
    创建匹配器

    Args:
        config: 配置快照
        alphabet: 拼音转写实现（可选，默认 pypinyin）

    Returns:
        StringMatcher 实例
    """
    return StringMatcher(config, alphabet)


__all__ = [
    # 匹配
    'StringMatcher',
    'create_matcher',
    'get_matcher',
    'update_settings',
    'fuzzy_search',
    'score_for_pinyin',
    'score',
    'is_match',
    'calculate_search_score',
    # 类型与配置
    'MatchResult',
    'MatchOption',
    'MatcherConfig',
    'SearchPrecisionScore',
    'DEFAULT_MATCH_OPTION',
    'parse_precision',
    'parse_bool',
    # 转写
    'Alphabet',
    'PinyinAlphabet',
    # 日志
    'setup_logging',
    'get_logger',
    'get_api_logger',
    'get_matcher_logger',
    'log_execution_time',
]
