"""
模糊匹配器

单遍扫描候选串，判断查询是否为候选串的有序、按词的子序列，
命中时给出排序分与命中位置。参考 https://github.com/mattyork/fuzzy

匹配器无共享可变状态，可在多线程中对不同候选并发调用。
配置快照在每次调用开始时读取一次。
"""

import warnings
from typing import List, Optional

from .alphabet import Alphabet, PinyinAlphabet
from .config import DEFAULT_CONFIG, DEFAULT_MATCH_OPTION, MatchOption, MatcherConfig
from .logging import get_matcher_logger
from .result import MatchResult
from .scoring import calculate_search_score

logger = get_matcher_logger()


def fold_case(text: str) -> str:
    """逐字符转小写，保证与原串等长（下标对齐）"""
    if text.isascii():
        return text.lower()
    return ''.join(_fold_char(c) for c in text)


def _fold_char(char: str) -> str:
    lowered = char.lower()
    # 'İ'.lower() 等会变成两个字符
    return lowered if len(lowered) == 1 else char


def prefix_precedes(text: str, index: int, word: str, length: int) -> bool:
    """text 中 index 之前的 length 个字符是否等于 word 的前 length 个字符"""
    start = index - length
    return start >= 0 and text[start:index] == word[:length]


class StringMatcher:
    """
    模糊匹配器

    Args:
        config: 配置快照，默认 MatcherConfig()
        alphabet: 拼音转写实现，默认按需创建 PinyinAlphabet
    """

    def __init__(self, config: MatcherConfig = None, alphabet: Alphabet = None):
        self.config = config or DEFAULT_CONFIG
        self._alphabet = alphabet

    @property
    def alphabet(self) -> Alphabet:
        if self._alphabet is None:
            self._alphabet = PinyinAlphabet(
                max_length=self.config.max_pinyin_length,
                max_combinations=self.config.max_pinyin_combinations,
            )
        return self._alphabet

    def update_config(self, **changes) -> MatcherConfig:
        """设置变更：整体替换配置快照，不影响进行中的调用"""
        self.config = self.config.replace(**changes)
        logger.info(
            f"匹配器配置已更新: precision={self.config.search_precision}, "
            f"pinyin={self.config.should_use_pinyin}"
        )
        return self.config

    def fuzzy_search(
        self,
        query: str,
        candidate: str,
        option: MatchOption = None,
        config: MatcherConfig = None,
    ) -> MatchResult:
        """
        模糊匹配

        Args:
            query: 用户输入，按单个空格分词，各词按顺序匹配
            candidate: 候选串
            option: 匹配选项，默认忽略大小写
            config: 配置快照，默认读取 self.config

        Returns:
            MatchResult，未命中时 success=False
        """
        config = config or self.config
        option = option or DEFAULT_MATCH_OPTION

        if not query or not candidate:
            return MatchResult(success=False, search_precision=config.search_precision)

        query = query.strip()
        if not query or not candidate.strip():
            return MatchResult(success=False, search_precision=config.search_precision)

        text = fold_case(candidate) if option.ignore_case else candidate
        query_folded = fold_case(query) if option.ignore_case else query

        words = query_folded.split(' ')
        word_index = 0
        word = words[word_index]

        pattern_index = 0
        first_match_index = -1
        last_match_index = 0
        all_matched = False
        is_full_word_matched = False
        all_words_fully_matched = True

        matched: List[int] = []       # 已完成的词
        word_matched: List[int] = []  # 当前词

        for index, char in enumerate(text):
            if char != word[pattern_index]:
                is_full_word_matched = False
                continue

            if first_match_index < 0:
                first_match_index = index

            if pattern_index == 0:
                # 当前词首字母
                is_full_word_matched = True
            elif not is_full_word_matched and prefix_precedes(text, index, word, pattern_index):
                # 前面紧邻的字符恰好是当前词的前缀，改用这段连续命中
                is_full_word_matched = True
                start = index - pattern_index
                if word_index == 0:
                    first_match_index = start
                word_matched = list(range(start, index))

            last_match_index = index + 1
            word_matched.append(index)
            pattern_index += 1

            if pattern_index == len(word):
                matched.extend(word_matched)
                word_matched = []

                # 连续空格产生的空词直接跳过
                word_index += 1
                while word_index < len(words) and not words[word_index]:
                    word_index += 1

                if word_index >= len(words):
                    all_matched = True
                    break

                word = words[word_index]
                pattern_index = 0
                if not is_full_word_matched:
                    all_words_fully_matched = False

        if not all_matched:
            return MatchResult(success=False, search_precision=config.search_precision)

        contained_fully = last_match_index - first_match_index == len(query_folded)
        score = calculate_search_score(
            query,
            candidate,
            first_match_index,
            last_match_index - first_match_index,
            contained_fully,
            all_words_fully_matched,
        )
        pinyin_score = self.score_for_pinyin(candidate, query, config=config)

        return MatchResult(
            success=True,
            raw_score=max(score, pinyin_score),
            matched_indices=matched,
            search_precision=config.search_precision,
        )

    def score_for_pinyin(self, source: str, target: str, config: MatcherConfig = None) -> int:
        """
        拼音匹配分：用查询串匹配候选串的全拼与首字母缩写，取较高者

        Args:
            source: 候选串（含汉字）
            target: 查询串
        """
        config = config or self.config
        if not config.should_use_pinyin:
            return 0

        if not source or not target:
            return 0

        alphabet = self.alphabet
        if not alphabet.contains_ideographic(source):
            return 0

        combinations = alphabet.combinations(source)
        pinyin_score = max(
            (self.fuzzy_search(target, ''.join(c), config=config).score for c in combinations),
            default=0,
        )
        acronym_score = max(
            (self.fuzzy_search(target, alphabet.acronym(c), config=config).score for c in combinations),
            default=0,
        )
        return max(pinyin_score, acronym_score)


# 全局默认匹配器
_matcher: Optional[StringMatcher] = None


def get_matcher() -> StringMatcher:
    """获取默认匹配器单例（配置取自环境变量）"""
    global _matcher
    if _matcher is None:
        _matcher = StringMatcher(MatcherConfig.from_env())
    return _matcher


def update_settings(search_precision: int = None, should_use_pinyin: bool = None) -> MatcherConfig:
    """宿主程序设置变更时调用，替换默认匹配器的配置快照"""
    changes = {}
    if search_precision is not None:
        changes['search_precision'] = int(search_precision)
    if should_use_pinyin is not None:
        changes['should_use_pinyin'] = bool(should_use_pinyin)
    return get_matcher().update_config(**changes)


def fuzzy_search(query: str, candidate: str, option: MatchOption = None) -> MatchResult:
    return get_matcher().fuzzy_search(query, candidate, option)


def score_for_pinyin(source: str, target: str) -> int:
    return get_matcher().score_for_pinyin(source, target)


def score(source: str, target: str) -> int:
    """已废弃，请使用 fuzzy_search"""
    warnings.warn("score() 已废弃，请使用 fuzzy_search()", DeprecationWarning, stacklevel=2)
    if not source or not target:
        return 0
    return get_matcher().fuzzy_search(target, source).score


def is_match(source: str, target: str) -> bool:
    """已废弃，请使用 fuzzy_search"""
    warnings.warn("is_match() 已废弃，请使用 fuzzy_search()", DeprecationWarning, stacklevel=2)
    if not source or not target:
        return False
    return get_matcher().fuzzy_search(target, source).score > 0
