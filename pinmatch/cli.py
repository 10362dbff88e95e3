"""
PinMatch 命令行工具
"""

import argparse
import sys

import orjson


def _build_matcher(args):
    from pinmatch.engine import MatcherConfig, create_matcher, parse_precision

    config = MatcherConfig.from_env()
    if args.precision is not None:
        config = config.replace(search_precision=parse_precision(args.precision))
    if args.pinyin:
        config = config.replace(should_use_pinyin=True)
    return create_matcher(config)


def _highlight(text: str, indices) -> str:
    """用 [] 标出命中字符"""
    marked = set(indices)
    return ''.join(f"[{c}]" if i in marked else c for i, c in enumerate(text))


def _dump(data):
    sys.stdout.write(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode('utf-8') + "\n")


def cmd_match(args) -> int:
    from pinmatch.engine import MatchOption

    matcher = _build_matcher(args)
    result = matcher.fuzzy_search(args.query, args.candidate, MatchOption(ignore_case=not args.case_sensitive))

    if args.json:
        _dump(result.to_dict())
    elif result.success:
        print(f"{_highlight(args.candidate, result.matched_indices)}  score={result.score} raw={result.raw_score}")
    else:
        print("未匹配")

    return 0 if result.success else 1


def cmd_rank(args) -> int:
    from pinmatch.engine import MatchOption, get_logger, log_execution_time

    matcher = _build_matcher(args)
    option = MatchOption(ignore_case=not args.case_sensitive)
    config = matcher.config

    @log_execution_time(get_logger('pinmatch.cli'))
    def rank_all():
        results = []
        for candidate in args.candidates:
            result = matcher.fuzzy_search(args.query, candidate, option, config=config)
            if result.success and result.score > 0:
                results.append((candidate, result))
        results.sort(key=lambda item: item[1].score, reverse=True)
        return results[:args.top_k]

    ranked = rank_all()

    if args.json:
        _dump([{'candidate': c, **r.to_dict()} for c, r in ranked])
    else:
        for i, (candidate, result) in enumerate(ranked, 1):
            print(f"{i}. {_highlight(candidate, result.matched_indices)} ({result.score})")

    return 0 if ranked else 1


def main(argv=None):
    """命令行入口"""
    parser = argparse.ArgumentParser(
        prog="pinmatch",
        description="PinMatch - 启动器模糊匹配引擎",
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    # 匹配参数
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-p", "--precision", default=None, help="搜索精度: 整数或 regular / low / none")
    common.add_argument("--pinyin", action="store_true", help="启用拼音匹配")
    common.add_argument("--case-sensitive", action="store_true", help="区分大小写")
    common.add_argument("--json", action="store_true", help="JSON 输出")

    # match 命令
    match_parser = subparsers.add_parser("match", parents=[common], help="匹配单个候选")
    match_parser.add_argument("query", help="查询")
    match_parser.add_argument("candidate", help="候选文本")

    # rank 命令
    rank_parser = subparsers.add_parser("rank", parents=[common], help="对多个候选打分排序")
    rank_parser.add_argument("query", help="查询")
    rank_parser.add_argument("candidates", nargs="+", help="候选文本")
    rank_parser.add_argument("-k", "--top-k", type=int, default=10, help="返回候选数量")

    # server 命令
    server_parser = subparsers.add_parser("server", help="启动 API 服务")
    server_parser.add_argument("--host", default="0.0.0.0", help="绑定地址 (默认: 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=3000, help="端口 (默认: 3000)")

    # version 命令
    subparsers.add_parser("version", help="显示版本")

    args = parser.parse_args(argv)

    if args.command in ("match", "rank"):
        handler = cmd_match if args.command == "match" else cmd_rank
        try:
            return handler(args)
        except ValueError as e:
            print(f"参数错误: {e}", file=sys.stderr)
            return 2

    elif args.command == "server":
        from pinmatch.api.server import main as server_main
        import os
        os.environ["HOST"] = args.host
        os.environ["PORT"] = str(args.port)
        server_main()

    elif args.command == "version":
        from pinmatch import __version__
        print(f"PinMatch v{__version__}")

    else:
        parser.print_help()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
