"""
匹配结果与搜索精度过滤
"""

from typing import List, Optional


class MatchResult:
    """
    单次匹配结果

    - raw_score: 未经精度过滤的原始分
    - score: 过滤后的最终分，仅在设置 raw_score 时按当时的精度计算
    - matched_indices: 命中字符在候选串中的位置（升序，用于高亮）
    """

    __slots__ = ('success', 'matched_indices', 'search_precision', '_raw_score', '_score')

    def __init__(
        self,
        success: bool = False,
        raw_score: int = 0,
        matched_indices: Optional[List[int]] = None,
        search_precision: int = 0,
    ):
        self.success = success
        self.matched_indices = matched_indices if matched_indices is not None else []
        self.search_precision = search_precision
        self.raw_score = raw_score

    @property
    def raw_score(self) -> int:
        return self._raw_score

    @raw_score.setter
    def raw_score(self, value: int):
        self._raw_score = value
        self._score = self._apply_search_precision_filter(value)

    @property
    def score(self) -> int:
        return self._score

    def is_search_precision_score_met(self) -> bool:
        """区分“匹配但被精度过滤”与“未匹配”"""
        return self._is_search_precision_score_met(self._score)

    def _is_search_precision_score_met(self, score: int) -> bool:
        return score >= self.search_precision

    def _apply_search_precision_filter(self, score: int) -> int:
        return score if self._is_search_precision_score_met(score) else 0

    def to_dict(self) -> dict:
        return {
            'success': self.success,
            'raw_score': self._raw_score,
            'score': self._score,
            'matched_indices': list(self.matched_indices),
        }

    def __repr__(self) -> str:
        return (
            f"MatchResult(success={self.success}, raw_score={self._raw_score}, "
            f"score={self._score}, matched_indices={self.matched_indices})"
        )
