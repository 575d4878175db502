# -*- coding: utf-8 -*-
"""
校验工具的异常定义。

只有配置类错误是致命的：它们在扫描开始前抛出，由命令行入口转换为退出码 1。
单个文件、页面或目录项上的错误都在扫描过程中就地计数，不会以异常形式传播。
"""
from enum import Enum
from typing import Dict, Optional


class VerifyErrorType(Enum):
    """错误类型"""
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    BASE_DIRECTORY_ERROR = "BASE_DIRECTORY_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class VerifyError(Exception):
    """校验工具异常基类"""

    def __init__(self, message: str, error_type: VerifyErrorType = VerifyErrorType.UNKNOWN_ERROR,
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def __str__(self):
        return f"[{self.error_type.value}] {self.message}"


class ConfigurationError(VerifyError):
    """命令行参数或扫描配置不合法"""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, VerifyErrorType.CONFIGURATION_ERROR, details)


class BaseDirectoryError(VerifyError):
    """base 目录不存在或不是目录"""

    def __init__(self, path: str, reason: str = "is not a directory"):
        super().__init__(f"base {path} {reason}", VerifyErrorType.BASE_DIRECTORY_ERROR, {"path": path})
        self.path = path
