#!/usr/bin/env python3
"""CLI run模块测试

测试YAML配置驱动的CLI入口功能，包括场景调度和参数解析。
"""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from chainwavesim.cli.run import main


@pytest.fixture(autouse=True)
def _close_file_handlers():
    """每个用例结束后移除 run.log 文件处理器"""
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
            h.close()


def _write_config(tmp_path, data, name="run.yaml"):
    data = {**data, "run": {**data.get("run", {}), "output_dir": str(tmp_path / "{name}")}}
    config_file = tmp_path / name
    config_file.write_text(yaml.dump(data))
    return config_file


class TestCLIRunBasic:
    """CLI基本功能测试"""

    def test_missing_config_argument(self):
        """测试缺少配置文件参数时的错误处理"""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2  # argparse错误码

    def test_nonexistent_config_file(self, tmp_path, monkeypatch):
        """不存在的配置文件被跳过，使用内置默认场景"""
        monkeypatch.chdir(tmp_path)
        with patch("chainwavesim.cli.run.run_chain_wave_pipeline") as mock_pipeline:
            result = main(["-c", "nonexistent.yaml"])
            assert result == 0
            mock_pipeline.assert_called_once()
        assert (tmp_path / "examples" / "logs").is_dir()

    def test_output_files_written(self, tmp_path):
        config_file = _write_config(
            tmp_path, {"scenario": "chain_wave", "run": {"name": "files_test"}}
        )
        with patch("chainwavesim.cli.run.run_chain_wave_pipeline") as mock_pipeline:
            assert main(["-c", str(config_file)]) == 0
        outdir = tmp_path / "files_test"
        assert (outdir / "resolved_config.yaml").exists()
        assert (outdir / "manifest.json").exists()
        assert (outdir / "run.log").exists()
        effective = yaml.safe_load((outdir / "effective_config.yaml").read_text())
        assert effective["scenario"] == "chain_wave"
        assert effective["chain"]["n_oscillators"] == 40
        cfg, outdir_arg = mock_pipeline.call_args.args
        assert outdir_arg == str(outdir)
        assert cfg.get("forcing.amplitude") == 0.5


class TestCLIScenarioDispatch:
    """场景调度测试"""

    @pytest.mark.parametrize("scenario", ["chain_wave", "wave", "elastic_wave"])
    def test_chain_wave_dispatch(self, tmp_path, scenario):
        config_file = _write_config(tmp_path, {"scenario": scenario})
        with patch("chainwavesim.cli.run.run_chain_wave_pipeline") as mock_pipeline:
            assert main(["-c", str(config_file)]) == 0
            mock_pipeline.assert_called_once()

    @pytest.mark.parametrize("scenario", ["chain_modes", "modes", "Chain_Modes"])
    def test_chain_modes_dispatch(self, tmp_path, scenario):
        config_file = _write_config(tmp_path, {"scenario": scenario})
        with (
            patch("chainwavesim.cli.run.run_chain_modes_pipeline") as mock_modes,
            patch("chainwavesim.cli.run.run_chain_wave_pipeline") as mock_wave,
        ):
            assert main(["-c", str(config_file)]) == 0
            mock_modes.assert_called_once()
            mock_wave.assert_not_called()

    def test_unknown_scenario_handling(self, tmp_path):
        config_file = _write_config(tmp_path, {"scenario": "unknown_scenario"})
        with pytest.raises(ValueError, match="未知场景类型"):
            main(["-c", str(config_file)])


class TestCLIEdgeCases:
    """边界情况测试"""

    def test_malformed_yaml_handling(self, tmp_path):
        bad_config = tmp_path / "bad.yaml"
        bad_config.write_text("invalid: yaml: content: [")
        with pytest.raises(yaml.YAMLError):
            main(["-c", str(bad_config)])

    def test_empty_config_handling(self, tmp_path, monkeypatch):
        """空配置使用默认 chain_wave 场景"""
        monkeypatch.chdir(tmp_path)
        empty_config = tmp_path / "empty.yaml"
        empty_config.write_text("")
        with patch("chainwavesim.cli.run.run_chain_wave_pipeline") as mock_pipeline:
            assert main(["-c", str(empty_config)]) == 0
            mock_pipeline.assert_called_once()


@pytest.mark.slow
class TestCLIEndToEnd:
    """小规模真实运行"""

    def test_chain_wave_run(self, tmp_path):
        config_file = _write_config(
            tmp_path,
            {
                "scenario": "chain_wave",
                "run": {"name": "e2e"},
                "chain": {"n_oscillators": 6},
                "time": {"t1": 2.0, "n_steps": 201},
                "integrator": {"max_workers": 2},
                "visualization": {"dpi": 40, "snapshots": [1.0]},
            },
        )
        assert main(["-c", str(config_file), "-v"]) == 0
        outdir = tmp_path / "e2e"
        summary = json.loads((outdir / "chain_wave_summary.json").read_text())
        assert summary["n_oscillators"] == 6
        assert summary["n_steps"] == 201
        assert summary["finite"] is True
        assert Path(summary["artifacts"]["space_time"]).exists()
        assert len(summary["artifacts"]["snapshots"]) == 1

    def test_chain_modes_run(self, tmp_path):
        config_file = _write_config(
            tmp_path,
            {
                "scenario": "chain_modes",
                "run": {"name": "modes"},
                "chain": {"n_oscillators": 10},
            },
        )
        assert main(["-c", str(config_file)]) == 0
        report = json.loads((tmp_path / "modes" / "chain_modes.json").read_text())
        assert len(report["omegas"]) == 9
        assert report["stable"] is True  # 默认 20000 步远小于临界步长
