# -*- coding: utf-8 -*-
"""
CLI接口模块
负责日志输出配置与扫描结果的展示
"""

import sys

from loguru import logger
from rich.console import Console
from rich.table import Table

from pgverify.config import ScanConfig
from pgverify.scanner.report import ScanReport, Verdict

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """日志统一输出到 stderr；verbose 时打开 DEBUG 级别。"""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format="{level}: {message}")


class CLIInterface:
    """命令行接口类"""

    def __init__(self, config: ScanConfig):
        self.config = config

    def print_error(self, message: str) -> None:
        err_console.print(f"ERROR: {message}", markup=False, highlight=False, soft_wrap=True)

    def print_report(self, report: ScanReport) -> None:
        """打印最终结论，必要时附带损坏块列表"""
        if self.config.dump_corrupted and (report.findings or report.unreadable):
            self.print_findings(report)
        if report.verdict is Verdict.CORRUPT:
            console.print(f"[bold red]{report.summary_line()}[/bold red]", highlight=False, soft_wrap=True)
        else:
            console.print(f"[bold green]{report.summary_line()}[/bold green]", highlight=False, soft_wrap=True)

    def print_findings(self, report: ScanReport) -> None:
        table = Table(title="Corrupted blocks")
        table.add_column("file")
        table.add_column("block", justify="right")
        table.add_column("absolute block", justify="right")
        table.add_column("stored", justify="right")
        table.add_column("computed", justify="right")
        for block in report.findings:
            if block.truncated:
                stored, computed = "-", "short read"
            else:
                stored, computed = f"{block.stored_checksum:x}", f"{block.computed_checksum:x}"
            table.add_row(block.file_path, str(block.local_block), str(block.absolute_block), stored, computed)
        console.print(table)
        for item in report.unreadable:
            console.print(f"unreadable: {item.file_path} ({item.reason})", markup=False, highlight=False, soft_wrap=True)
