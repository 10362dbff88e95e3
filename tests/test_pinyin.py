"""
拼音回退测试：转写接口、pypinyin 实现、拼音打分。
"""
import unittest

from pinmatch.engine import Alphabet, MatcherConfig, PinyinAlphabet, StringMatcher


class FakeAlphabet(Alphabet):
    """固定转写表，记录调用次数"""

    TABLE = {
        "音乐yy": [("yin", "yue", "y", "y")],
        "音乐": [("yin", "yue"), ("yin", "le")],
    }

    def __init__(self):
        self.calls = 0

    def contains_ideographic(self, text):
        return any('一' <= c <= '鿿' for c in text)

    def combinations(self, text):
        self.calls += 1
        return self.TABLE.get(text, [])


class TestScoreForPinyin(unittest.TestCase):
    """测试 score_for_pinyin."""

    def setUp(self):
        self.alphabet = FakeAlphabet()
        self.enabled = StringMatcher(MatcherConfig(should_use_pinyin=True), self.alphabet)
        self.disabled = StringMatcher(MatcherConfig(should_use_pinyin=False), self.alphabet)

    def test_acronym_beats_full_pinyin(self):
        """测试取全拼与首字母中较高者."""
        # 全拼 "yinyueyy" 得 80，首字母 "yyyy" 得 135
        self.assertEqual(self.enabled.score_for_pinyin("音乐yy", "yy"), 135)

    def test_disabled(self):
        """测试关闭拼音后为 0 且不调用转写."""
        self.assertEqual(self.disabled.score_for_pinyin("音乐yy", "yy"), 0)
        self.assertEqual(self.alphabet.calls, 0)

    def test_no_ideographic(self):
        """测试不含汉字时为 0 且不调用转写."""
        self.assertEqual(self.enabled.score_for_pinyin("Project File", "fi"), 0)
        self.assertEqual(self.alphabet.calls, 0)

    def test_empty_inputs(self):
        """测试空输入."""
        self.assertEqual(self.enabled.score_for_pinyin("", "yy"), 0)
        self.assertEqual(self.enabled.score_for_pinyin("音乐yy", ""), 0)

    def test_no_combinations(self):
        """测试转写结果为空."""
        self.assertEqual(self.enabled.score_for_pinyin("汉字", "hz"), 0)

    def test_raw_score_takes_maximum(self):
        """测试原始分取字面分与拼音分的较大者."""
        literal = self.disabled.fuzzy_search("yy", "音乐yy")
        combined = self.enabled.fuzzy_search("yy", "音乐yy")
        self.assertEqual(literal.raw_score, 110)
        self.assertEqual(combined.raw_score, 135)
        # 命中位置仍取字面匹配
        self.assertEqual(combined.matched_indices, [2, 3])

    def test_pinyin_respects_precision(self):
        """测试拼音分同样经过精度过滤."""
        matcher = StringMatcher(MatcherConfig(should_use_pinyin=True, search_precision=200), self.alphabet)
        self.assertEqual(matcher.score_for_pinyin("音乐yy", "yy"), 0)

    def test_literal_failure_skips_pinyin(self):
        """测试字面未命中时不计算拼音分."""
        result = self.enabled.fuzzy_search("yy", "音乐")
        self.assertFalse(result.success)
        self.assertEqual(self.alphabet.calls, 0)
        self.assertGreater(self.enabled.score_for_pinyin("音乐", "yy"), 0)


class TestPinyinAlphabet(unittest.TestCase):
    """测试 pypinyin 转写实现."""

    @classmethod
    def setUpClass(cls):
        cls.alphabet = PinyinAlphabet()

    def test_contains_ideographic(self):
        """测试汉字检测."""
        self.assertTrue(self.alphabet.contains_ideographic("QQ音乐"))
        self.assertFalse(self.alphabet.contains_ideographic("Project File"))
        self.assertFalse(self.alphabet.contains_ideographic(""))

    def test_long_text_skipped(self):
        """测试过长文本不做转写."""
        self.assertFalse(self.alphabet.contains_ideographic("音" * 41))
        self.assertTrue(self.alphabet.contains_ideographic("音" * 40))

    def test_heteronym_combinations(self):
        """测试多音字展开."""
        combos = self.alphabet.combinations("音乐")
        self.assertIn(("yin", "yue"), combos)
        self.assertIn(("yin", "le"), combos)
        self.assertEqual(len(combos), len(set(combos)))

    def test_non_ideographic_kept(self):
        """测试非汉字字符原样保留."""
        combos = self.alphabet.combinations("QQ音乐")
        for combo in combos:
            self.assertEqual(combo[:2], ("Q", "Q"))
            self.assertEqual(len(combo), 4)

    def test_combination_limit(self):
        """测试组合数量上限."""
        limited = PinyinAlphabet(max_combinations=1)
        self.assertEqual(len(limited.combinations("音乐")), 1)

    def test_acronym(self):
        """测试首字母缩写."""
        self.assertEqual(self.alphabet.acronym(("yin", "yue")), "yy")
        self.assertEqual(self.alphabet.acronym(("Q", "Q", "yin", "yue")), "QQyy")
        self.assertEqual(self.alphabet.acronym(()), "")

    def test_end_to_end(self):
        """测试启用拼音后的完整匹配."""
        matcher = StringMatcher(MatcherConfig(should_use_pinyin=True), self.alphabet)
        result = matcher.fuzzy_search("yy", "音乐yy")
        self.assertTrue(result.success)
        self.assertEqual(result.raw_score, 135)

    def test_default_alphabet(self):
        """测试未指定转写时使用 pypinyin."""
        matcher = StringMatcher(MatcherConfig(should_use_pinyin=True))
        self.assertIsInstance(matcher.alphabet, PinyinAlphabet)
        self.assertGreater(matcher.score_for_pinyin("音乐", "yinyue"), 0)


if __name__ == '__main__':
    unittest.main()
