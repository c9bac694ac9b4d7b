"""配置加载模块

提供轻量的 YAML 配置加载与工具函数：

- 递归合并多份 YAML（后者覆盖前者），可选内置默认值作为最底层
- 点路径访问（如 ``chain.n_oscillators``）
- 基于模板创建输出目录并保存配置快照

Notes
-----
链式振子场景的参数都很扁平，不需要 Hydra 一类的组合框架；
默认值集中在 :data:`CHAIN_WAVE_DEFAULTS`，与原始参考脚本一致。
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
import math
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 参考场景：40 个振子，左半质量 1、右半质量 2，刚度 100/75，
# 正弦驱动 A=0.5、Ω=π/2，时长取平均特征周期的 100 倍
CHAIN_WAVE_DEFAULTS: dict[str, Any] = {
    "scenario": "chain_wave",
    "run": {"name": "chain_wave"},
    "chain": {
        "n_oscillators": 40,
        "spacing": 0.5,
        "masses": {"left": 1.0, "right": 2.0},
        "stiffness": {"left": 100.0, "right": 75.0},
    },
    "time": {"t0": 0.0, "t1": "auto", "periods": 100.0, "n_steps": 20000},
    "forcing": {"type": "sine", "amplitude": 0.5, "angular_frequency": math.pi / 2},
    "integrator": {"max_workers": 1},
    "visualization": {
        "enabled": True,
        "dpi": 150,
        "snapshots": [],
        "space_time": True,
        "playback": {"enabled": False, "fps": 20, "time_scale": 1.0, "max_frames": 200},
    },
}


def _deep_update(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_update(out[k], v)
        else:
            out[k] = v
    return out


def _get_by_path(d: dict, path: str, default: Any = None) -> Any:
    cur = d
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


@dataclass
class _Resolved:
    data: dict
    sources: list[str]


class ConfigManager:
    """配置管理器

    加载一组 YAML 配置文件并进行递归合并，提供点路径访问与输出目录工具。

    Parameters
    ----------
    files : Iterable[str] | None, optional
        需要加载的 YAML 文件列表，后者覆盖前者；不存在的文件被跳过。
    defaults : dict | None, optional
        最底层的默认配置（例如 :data:`CHAIN_WAVE_DEFAULTS`）；为 ``None``
        时从空配置开始。

    Attributes
    ----------
    data : dict
        合并后的配置数据。
    """

    def __init__(
        self, files: Iterable[str] | None = None, defaults: dict | None = None
    ) -> None:
        self._resolved = self._load_all(files, defaults)

    # --------- 加载与解析 ---------
    def _load_all(
        self, files: Iterable[str] | None, defaults: dict | None
    ) -> _Resolved:
        data: dict[str, Any] = _deep_update({}, defaults or {})
        sources: list[str] = ["<defaults>"] if defaults else []
        for p in files or ():
            path = Path(p)
            if not path.exists():
                logger.warning(f"配置文件不存在，已跳过: {path}")
                continue
            with open(path, encoding="utf-8") as f:
                ov = yaml.safe_load(f) or {}
            data = _deep_update(data, ov)
            sources.append(str(path))
        return _Resolved(data=data, sources=sources)

    @property
    def data(self) -> dict:
        """获取合并后的配置数据字典。"""
        return self._resolved.data

    @property
    def sources(self) -> list[str]:
        """参与合并的配置来源（按加载顺序）。"""
        return list(self._resolved.sources)

    # --------- 访问接口 ---------
    def get(self, path: str, default: Any | None = None) -> Any:
        """获取配置值（点路径）

        Parameters
        ----------
        path : str
            点路径键名，例如 ``"time.n_steps"``。
        default : Any, optional
            当键不存在时返回的默认值。

        Returns
        -------
        Any
            对应的配置值或 ``default``。
        """
        return _get_by_path(self._resolved.data, path, default)

    # --------- 实用工具 ---------
    def make_output_dir(self, name: str | None = None) -> str:
        """创建输出目录

        依据模板 ``run.output_dir`` 创建目录，支持 ``{name}`` 与
        ``{timestamp}`` 占位符，默认 ``examples/logs/{name}_{timestamp}``。
        """
        pattern = str(self.get("run.output_dir", "examples/logs/{name}_{timestamp}"))
        name = name or str(self.get("run.name", "run"))
        ts = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
        out = pattern.format(name=name, timestamp=ts)
        os.makedirs(out, exist_ok=True)
        return out

    def snapshot(self, output_dir: str) -> None:
        """在输出目录写入 ``resolved_config.yaml`` 与 ``manifest.json``。

        快照失败只记录警告，不阻断主流程。
        """
        try:
            path = Path(output_dir) / "resolved_config.yaml"
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    self._resolved.data, f, allow_unicode=True, sort_keys=True
                )
            manifest = {
                "timestamp": _dt.datetime.now().isoformat(),
                "sources": self._resolved.sources,
            }
            with open(Path(output_dir) / "manifest.json", "w", encoding="utf-8") as f:
                json.dump(manifest, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"配置快照写入失败: {e}")
