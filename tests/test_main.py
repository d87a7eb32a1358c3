"""
Tests for the application orchestration.
"""

import json
from unittest.mock import Mock, patch

import pytest

from air_quality_graph.main import AirQualityGraphApp, main
from air_quality_graph.storage import InMemoryStore

FINAL_DATA = [{"timestamp": "2020-04-02T23:54:48", "co": -1, "sn": "SN000-072"}]
RAW_DATA = [{"timestamp": "2020-04-02T23:54:48", "bin0": 5}]


@pytest.fixture
def config_file(tmp_path, monkeypatch, sn, base_url):
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "test.log"))
    monkeypatch.setenv("QUANTAQ_APIKEY", "test_key")
    for name in ("API_BASE_URL", "STORAGE_PATH", "DEVICES", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "api": {"base_url": base_url, "timeout": 5, "max_retries": 0},
        "storage": {"path": str(tmp_path / "state.json")},
        "devices": [sn, "SN000-BAD"],
        "processing": {"max_workers": 2},
    }), encoding="utf-8")
    return str(path)


@pytest.fixture
def served_api(fake_api, sn):
    fake_api.add_response(fake_api.get_endpoint(sn), {"data": FINAL_DATA, "meta": {}})
    fake_api.add_response(fake_api.get_endpoint(sn, raw=True), {"data": RAW_DATA, "meta": {}})
    fake_api.close = Mock()
    return fake_api


class TestAirQualityGraphApp:
    """Test cases for AirQualityGraphApp."""

    def test_run_all_modes(self, config_file, served_api, sn):
        store = InMemoryStore()
        app = AirQualityGraphApp(config_file, store=store)

        with patch("air_quality_graph.main.QuantAQAPI", return_value=served_api):
            status = app.run(mode="all", devices=[sn])

        assert status == {sn: True}
        latest = store.read(f"{sn}/latest")
        assert latest == {"timestamp": "2020-04-02T23:54:48", "co": 0, "sn": "SN000-072", "bin0": 5}
        assert store.read(f"{sn}/graph") == [latest]
        served_api.close.assert_called_once()

    def test_failing_device_does_not_stop_others(self, config_file, served_api, sn):
        store = InMemoryStore()
        app = AirQualityGraphApp(config_file, store=store)

        with patch("air_quality_graph.main.QuantAQAPI", return_value=served_api):
            status = app.run(mode="latest")

        assert status == {sn: True, "SN000-BAD": False}
        assert store.read(f"{sn}/latest") is not None
        assert store.read(f"{sn}/graph") is None

    def test_graph_mode_without_latest(self, config_file, served_api, sn):
        store = InMemoryStore()
        app = AirQualityGraphApp(config_file, store=store)

        with patch("air_quality_graph.main.QuantAQAPI", return_value=served_api):
            status = app.run(mode="graph", devices=[sn])

        assert status == {sn: True}
        assert store.snapshot() == {}
        assert served_api.requested_urls == []

    def test_default_store_is_json_file(self, config_file, served_api, tmp_path, sn):
        app = AirQualityGraphApp(config_file)

        with patch("air_quality_graph.main.QuantAQAPI", return_value=served_api):
            app.run(mode="latest", devices=[sn])

        with open(tmp_path / "state.json", encoding="utf-8") as f:
            assert json.load(f)[sn]["latest"]["bin0"] == 5

    def test_device_log_lines_are_tagged(self, config_file, served_api, tmp_path, sn):
        app = AirQualityGraphApp(config_file, store=InMemoryStore())

        with patch("air_quality_graph.main.QuantAQAPI", return_value=served_api):
            app.run(mode="all", devices=[sn])

        log = (tmp_path / "logs" / "test.log").read_text(encoding="utf-8").splitlines()
        updates = [line for line in log if "Done updating" in line]
        assert len(updates) == 2
        assert all(f"[{sn}]" in line for line in updates)
        assert "[-]" in next(line for line in log if "Run Summary" in line)

    def test_invalid_mode(self, config_file):
        app = AirQualityGraphApp(config_file, store=InMemoryStore())

        with pytest.raises(ValueError):
            app.run(mode="everything")

    def test_missing_api_key(self, config_file, served_api, monkeypatch):
        monkeypatch.delenv("QUANTAQ_APIKEY")
        app = AirQualityGraphApp(config_file, store=InMemoryStore())

        with patch("air_quality_graph.main.QuantAQAPI", return_value=served_api):
            with pytest.raises(ValueError):
                app.run()

        served_api.close.assert_called_once()


def test_main_exits_on_failed_device(config_file, served_api):
    argv = ["air-quality-graph", "--config", config_file, "--mode", "latest"]

    with patch("sys.argv", argv), \
            patch("air_quality_graph.main.QuantAQAPI", return_value=served_api):
        with pytest.raises(SystemExit) as exc_info:
            main()

    assert exc_info.value.code == 1
