"""Command line front end of the number library."""

from __future__ import annotations

import argparse
import sys
import time
import webbrowser
from pathlib import Path

from numberlib.config import Config, load_config, save_config
from numberlib.encoding import decode_content
from numberlib.extract import PatternError, extract_verify_code
from numberlib.fetch import DEFAULT_TIMEOUT, FetchError, fetch_verify_code, normalize_link
from numberlib.library import NumberLibrary
from numberlib.records import NumberRecord, load_records, save_records
from numberlib.verify import VerifyTracker

__all__ = ["main"]

CONFIG_FILE = "NumberLibrary.cfg"
DATA_FILE = "NumberLibrary.dat"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="numberlib", description="Keep phone numbers and fetch their verification codes."
    )
    parser.add_argument("--data", default=DATA_FILE, help="data file path")
    parser.add_argument("--config", default=CONFIG_FILE, help="config file path")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="show all records")

    p = sub.add_parser("import", help="import lines from a text file")
    p.add_argument("file")

    p = sub.add_parser("remark", help="set the remark of a record")
    p.add_argument("index", type=int)
    p.add_argument("text")

    p = sub.add_parser("delete", help="delete one record")
    p.add_argument("index", type=int)

    sub.add_parser("clear", help="delete all records")

    p = sub.add_parser("open", help="open a record's link in the browser")
    p.add_argument("index", type=int)

    p = sub.add_parser("fetch", help="poll a record's link for its verification code")
    p.add_argument("index", type=int)
    p.add_argument("--max-rounds", type=int, default=None)
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)

    p = sub.add_parser("test-regex", help="try the verify code pattern on some text")
    p.add_argument("content", nargs="?", help="text to test; read from stdin if omitted")

    p = sub.add_parser("config", help="show or change settings")
    p.add_argument("--refresh-time", type=int)
    p.add_argument("--verify-count", type=int)
    p.add_argument("--number-regex")
    p.add_argument("--verify-code-regex")
    return parser


def _error(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _record_index(library: NumberLibrary, position: int) -> int | None:
    index = position - 1
    return index if 0 <= index < len(library) else None


def _cmd_list(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    for position, record in enumerate(library, 1):
        print(
            "\t".join(
                (str(position), record.number, record.verify_code, record.link, record.remark)
            )
        )
    return 0


def _cmd_import(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    try:
        raw = Path(args.file).read_bytes()
    except OSError:
        return _error("无法打开文件！")
    try:
        result = library.import_lines(decode_content(raw).splitlines())
    except PatternError as exc:
        return _error(f"正则错误: {exc}")
    save_records(data, library)
    if result.failed:
        message = f"成功导入 {result.imported} 条记录，失败 {result.failed} 条。"
        if result.failed_lines:
            message += "\n\n以下是部分失败的行:\n" + "\n".join(result.failed_lines)
            if result.failed > len(result.failed_lines):
                message += "\n...(更多行省略)"
    else:
        message = f"成功导入 {result.imported} 条记录。"
    print(message)
    return 0


def _cmd_remark(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    index = _record_index(library, args.index)
    if index is None:
        return _error(f"没有第 {args.index} 项")
    library.set_remark(index, args.text)
    save_records(data, library)
    return 0


def _cmd_delete(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    index = _record_index(library, args.index)
    if index is None:
        return _error("请先选择一个项目！")
    record = library.delete(index)
    save_records(data, library)
    print(f"已删除 \"{record.number}\"")
    return 0


def _cmd_clear(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    if len(library) == 0:
        return _error("列表为空，没有可删除的项目！")
    library.delete_all()
    save_records(data, library)
    return 0


def _cmd_open(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    index = _record_index(library, args.index)
    if index is None:
        return _error(f"没有第 {args.index} 项")
    link = library[index].link
    if not link:
        return _error("该记录没有链接！")
    if not webbrowser.open(normalize_link(link)):
        return _error("无法打开链接！")
    return 0


def _store_code(library: NumberLibrary, index: int, code: str) -> list[NumberRecord]:
    library[index].verify_code = code
    return list(library)


def _cmd_fetch(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    index = _record_index(library, args.index)
    if index is None:
        return _error(f"没有第 {args.index} 项")
    record = library[index]
    if not record.link:
        return _error("该记录没有链接！")
    config = library.config
    tracker = VerifyTracker(config.verify_count)
    tracker.start(index)
    rounds = 0
    try:
        while args.max_rounds is None or rounds < args.max_rounds:
            if rounds:
                time.sleep(max(0, config.refresh_time))
            rounds += 1
            try:
                code = fetch_verify_code(record.link, config.verify_code_regex, args.timeout)
                outcome = tracker.record_code(index, code)
            except FetchError as exc:
                outcome = tracker.record_error(index, str(exc))
            except PatternError as exc:
                tracker.stop(index)
                return _error(f"正则错误: {exc}")
            print(f"#{args.index} {outcome.text}")
            if outcome.confirmed:
                save_records(data, _store_code(library, index, outcome.code))
                print(f"项目 #{args.index} 成功获取验证码: {outcome.code}")
                return 0
    except KeyboardInterrupt:
        pass
    summary = tracker.stop(index)
    print(f"#{args.index} {summary or '已停止'}")
    return 1


def _cmd_test_regex(library: NumberLibrary, args: argparse.Namespace, data: Path) -> int:
    content = args.content if args.content is not None else sys.stdin.read()
    if not content:
        return _error("请输入要测试的内容")
    pattern = library.config.verify_code_regex
    try:
        code = extract_verify_code(content, pattern)
    except PatternError as exc:
        return _error(f"正则错误: {exc}")
    if code is None:
        print(f"未能从内容中提取验证码\n\n正则表达式: {pattern}\n\n请检查内容格式或正则表达式。")
        return 1
    print(f"成功提取验证码: {code}\n\n正则表达式: {pattern}")
    return 0


_COMMANDS = {
    "list": _cmd_list,
    "import": _cmd_import,
    "remark": _cmd_remark,
    "delete": _cmd_delete,
    "clear": _cmd_clear,
    "open": _cmd_open,
    "fetch": _cmd_fetch,
    "test-regex": _cmd_test_regex,
}


def _cmd_config(config: Config, args: argparse.Namespace, path: Path) -> int:
    changes = {
        "refresh_time": args.refresh_time,
        "verify_count": args.verify_count,
        "number_regex": args.number_regex,
        "verify_code_regex": args.verify_code_regex,
    }
    changed = False
    for name, value in changes.items():
        if value is not None:
            setattr(config, name, value)
            changed = True
    if changed:
        save_config(path, config)
    print(f"refresh_time={config.refresh_time}")
    print(f"verify_count={config.verify_count}")
    print(f"number_regex={config.number_regex}")
    print(f"verify_code_regex={config.verify_code_regex}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    args = _build_parser().parse_args(argv)
    config_path = Path(args.config)
    data_path = Path(args.data)
    config = load_config(config_path)
    if args.command == "config":
        return _cmd_config(config, args, config_path)
    library = NumberLibrary(config)
    library.merge(load_records(data_path))
    return _COMMANDS[args.command](library, args, data_path)


if __name__ == "__main__":
    sys.exit(main())