"""日志模块：为错误创建与处理流程提供结构化日志。

Telemetry for faultclass.

Provides the package loggers used by log-on-creation error classes and the
plan engine.
"""

from faultclass.telemetry.logger import (
    FaultLogger,
    JsonFormatter,
    LogLevel,
    TextFormatter,
    get_logger,
)

__all__ = [
    "FaultLogger",
    "JsonFormatter",
    "LogLevel",
    "TextFormatter",
    "get_logger",
]
