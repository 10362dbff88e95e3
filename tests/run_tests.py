#!/usr/bin/env python3
"""
测试运行脚本：发现并运行 tests/ 下全部测试，输出汇总。

用法: python tests/run_tests.py [--report PATH]
"""
import argparse
import sys
import unittest
from datetime import datetime
from io import StringIO
from pathlib import Path

import orjson


def run_all_tests(verbosity: int = 2):
    """运行所有测试，返回 (结果, 汇总)"""
    test_dir = Path(__file__).parent

    loader = unittest.TestLoader()
    suite = loader.discover(str(test_dir), pattern='test_*.py')

    stream = StringIO()
    runner = unittest.TextTestRunner(stream=stream, verbosity=verbosity)
    result = runner.run(suite)
    print(stream.getvalue())

    passed = result.testsRun - len(result.failures) - len(result.errors)
    report = {
        'timestamp': datetime.now().isoformat(),
        'tests_run': result.testsRun,
        'successes': passed,
        'failures': len(result.failures),
        'errors': len(result.errors),
        'skipped': len(result.skipped),
        'failure_details': [
            {'test': str(test), 'traceback': tb}
            for test, tb in result.failures + result.errors
        ],
    }
    return result, report


def main():
    parser = argparse.ArgumentParser(description="运行 PinMatch 测试")
    parser.add_argument("--report", default=None, help="JSON 报告输出路径")
    args = parser.parse_args()

    result, report = run_all_tests()

    print("=" * 70)
    print(f"总测试数: {report['tests_run']}")
    print(f"成功: {report['successes']}")
    print(f"失败: {report['failures']}")
    print(f"错误: {report['errors']}")
    print(f"跳过: {report['skipped']}")
    print("=" * 70)

    if args.report:
        Path(args.report).write_bytes(orjson.dumps(report, option=orjson.OPT_INDENT_2))
        print(f"测试报告已保存到: {args.report}")

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(main())
