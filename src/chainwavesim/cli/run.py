#!/usr/bin/env python3
"""YAML 场景入口（CLI）

使用示例::

    python -m chainwavesim.cli.run -c examples/modern_yaml/chain_wave.yaml

说明
----
- 本入口只负责 YAML 解析与场景调度；具体实现见 ``pipelines/*`` 模块。
- 未在 YAML 中给出的键取 :data:`~chainwavesim.core.config.CHAIN_WAVE_DEFAULTS`。
"""

from __future__ import annotations

import argparse
import logging
import os

import yaml

from chainwavesim.core.config import CHAIN_WAVE_DEFAULTS, ConfigManager
from chainwavesim.utils.logging_config import setup_logging

from .pipelines.chain_modes import run_chain_modes_pipeline
from .pipelines.chain_wave import run_chain_wave_pipeline


def main(argv: list[str] | None = None) -> int:
    """解析 YAML 并调度对应场景。"""
    ap = argparse.ArgumentParser(description="ChainWaveSim: YAML 驱动运行入口")
    ap.add_argument("-c", "--config", required=True, help="YAML配置文件路径")
    ap.add_argument(
        "-v", "--verbose", action="store_true", help="控制台输出 DEBUG 级别日志"
    )
    args = ap.parse_args(argv)

    cfg = ConfigManager(files=[args.config], defaults=CHAIN_WAVE_DEFAULTS)
    name = cfg.get("run.name", cfg.get("scenario", "run"))
    outdir = cfg.make_output_dir(name)
    setup_logging(outdir, level=logging.DEBUG if args.verbose else logging.INFO)
    log = logging.getLogger(__name__)
    cfg.snapshot(outdir)

    scenario = str(cfg.get("scenario", "chain_wave")).lower()

    # 写入精简版有效配置（便于复查）
    effective = {
        "scenario": scenario,
        "run": {"name": name},
        "chain": cfg.get("chain", {}),
        "time": cfg.get("time", {}),
        "forcing": cfg.get("forcing", {}),
    }
    try:
        with open(
            os.path.join(outdir, "effective_config.yaml"), "w", encoding="utf-8"
        ) as f:
            yaml.safe_dump(effective, f, allow_unicode=True, sort_keys=True)
    except OSError as e:
        log.warning(f"有效配置写入失败: {e}")

    log.info(
        f"场景: {scenario} | 振子数: {cfg.get('chain.n_oscillators')} | "
        f"驱动: {cfg.get('forcing.type', 'sine')}"
    )

    if scenario in ("chain_wave", "wave", "elastic_wave"):
        run_chain_wave_pipeline(cfg, outdir)
    elif scenario in ("chain_modes", "modes"):
        run_chain_modes_pipeline(cfg, outdir)
    else:
        raise ValueError(f"未知场景类型 scenario: {scenario}")

    log.info(f"完成。输出目录: {outdir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
