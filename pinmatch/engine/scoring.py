"""
匹配打分

根据命中位置、跨度、是否完整包含、各词是否整词命中计算排序分。
"""


def calculate_search_score(
    query: str,
    candidate: str,
    first_index: int,
    match_len: int,
    contained_fully: bool,
    all_words_fully_matched: bool,
) -> int:
    """
    计算字面匹配分

    Args:
        query: 查询串（已去除首尾空白）
        candidate: 候选串
        first_index: 首个命中字符的位置
        match_len: 首个命中到最后一个命中（不含）的跨度
        contained_fully: 整个查询是否连续出现在候选串中
        all_words_fully_matched: 除最后一个词外，各词是否都整词连续命中

    Returns:
        整数分，无上限
    """
    # 命中越靠前、越紧凑，分数越高
    score = 100 * (len(query) + 1) // ((1 + first_index) + (match_len + 1))

    # 候选串越短，加权越高
    length_gap = len(candidate) - len(query)
    if length_gap < 5:
        score += 20
    elif length_gap < 10:
        score += 10

    if contained_fully:
        score += 20

    if all_words_fully_matched:
        score += 20

    return score
