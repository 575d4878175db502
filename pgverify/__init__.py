"""
pgverify：离线校验 PostgreSQL 数据目录中数据页的校验和。

子包清单：
- storage: 页面格式、校验和算法、段文件读取
- scanner: 目录遍历、段文件扫描、块校验与结果汇总
- cli: 命令行入口
"""

__version__ = "0.1.0"
