"""日志配置

库代码只使用 ``logging.getLogger(__name__)``；处理器由 CLI 入口统一安装。
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s: %(message)s"


def setup_logging(output_dir: str | None = None, level: int = logging.INFO) -> None:
    """
    配置根日志器：控制台输出，并在输出目录写入 ``run.log``。

    Parameters
    ----------
    output_dir : str | None
        输出目录；提供时追加一个 DEBUG 级别的文件处理器。
    level : int
        控制台日志级别。
    """
    root = logging.getLogger()
    root.setLevel(min(level, logging.DEBUG) if output_dir else level)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S")
    # 控制台 handler：若不存在则添加，存在则调到期望级别
    stream_handlers = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
    ]
    if not stream_handlers:
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(fmt)
        root.addHandler(sh)
    else:
        for h in stream_handlers:
            h.setLevel(level)
    if output_dir:
        try:
            os.makedirs(output_dir, exist_ok=True)
            fh = logging.FileHandler(
                os.path.join(output_dir, "run.log"), mode="w", encoding="utf-8"
            )
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(fmt)
            root.addHandler(fh)
        except OSError:
            logger.warning("无法创建日志文件处理器，继续仅输出到控制台。")
