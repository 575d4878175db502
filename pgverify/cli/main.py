"""
pg-page-verify 命令行入口。

解析参数、构造扫描配置，对 <datadir>/base 执行一次扫描。
未发现损坏时退出码为 0，发现损坏或任何配置错误时为 1。
"""

import argparse
import sys
from typing import List, NoReturn, Optional

from loguru import logger

from pgverify.cli.cli_interface import CLIInterface, configure_logging, console, err_console
from pgverify.config import ScanConfig
from pgverify.errors import BaseDirectoryError, ConfigurationError
from pgverify.scanner.verifier import verify_base_directory


class _ArgumentParser(argparse.ArgumentParser):
    """参数错误时抛出 ConfigurationError，不以状态码 2 退出，统一映射为 1。"""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def build_parser(prog: str = "pg-page-verify") -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=prog,
        add_help=False,
        description="Verify page checksums of an offline PostgreSQL data directory.",
    )
    parser.add_argument("-c", "--dumpcorrupted", action="store_true", help="list corrupted blocks before the verdict")
    parser.add_argument("-D", "--datadir", metavar="directory", help="data directory")
    parser.add_argument("-h", "--help", action="store_true", help="print this help and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """执行一次扫描，返回进程退出码。"""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv:
        console.print(parser.format_help(), markup=False, highlight=False, soft_wrap=True)
        return 1

    try:
        args = parser.parse_args(argv)
    except ConfigurationError as e:
        err_console.print(f"ERROR: {e.message}", markup=False, highlight=False, soft_wrap=True)
        console.print(parser.format_help(), markup=False, highlight=False, soft_wrap=True)
        return 1

    if args.help:
        console.print(parser.format_help(), markup=False, highlight=False, soft_wrap=True)
        return 1

    configure_logging(args.verbose)

    try:
        if args.datadir is None:
            raise ConfigurationError("-D argument is required")
        config = ScanConfig.from_datadir(args.datadir, verbose=args.verbose, dump_corrupted=args.dumpcorrupted)
    except ConfigurationError as e:
        err_console.print(f"ERROR: {e.message}", markup=False, highlight=False, soft_wrap=True)
        return 1

    cli = CLIInterface(config)
    try:
        report = verify_base_directory(config)
    except BaseDirectoryError as e:
        logger.debug(f"fatal: {e}")
        cli.print_error(e.message)
        return 1

    cli.print_report(report)
    return report.exit_code


def run() -> NoReturn:
    sys.exit(main())


if __name__ == "__main__":
    run()
