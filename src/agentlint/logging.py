"""structlogによるロギング設定。"""

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog


def configure_logging(level: int | str = logging.INFO, json_format: bool = False) -> None:
    """アプリケーション全体のロギングを設定する。

    検証結果を標準出力に出すため、ログは標準エラー出力に書き出す。

    Args:
        level: ログレベル (例: logging.INFO, "DEBUG")。
        json_format: TrueならJSON形式、Falseならコンソール向けの整形出力。
    """
    if isinstance(level, str):
        level = level.upper()

    shared_processors: list[Callable[..., Any]] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # 標準ライブラリのloggingもstructlogで整形する
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
