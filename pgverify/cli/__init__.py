"""
CLI 子包：命令行参数解析与结果展示。
"""
