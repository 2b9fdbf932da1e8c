import importlib.util
import json
import sys
from pathlib import Path

import pytest

from tests.utils.trips import MAIN_DESTINATION, MAIN_ORIGIN, trip_payload

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "calendar_check.py"


@pytest.fixture(scope="module")
def calendar_check():
    spec = importlib.util.spec_from_file_location("calendar_check_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def run_main(module, monkeypatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["calendar_check.py", *args])
    module.main()


def group(trip_id, detour_threshold=None) -> dict:
    body = {"mainTrip": trip_payload(trip_id, MAIN_ORIGIN, MAIN_DESTINATION, 500), "candidates": []}
    if detour_threshold is not None:
        body["detourThreshold"] = detour_threshold
    return body


class TestUnreadableInput:
    def test_malformed_json_exits_1(self, calendar_check, monkeypatch, tmp_path, capsys) -> None:
        path = tmp_path / "trips.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            run_main(calendar_check, monkeypatch, "--input", str(path))

        assert exc.value.code == 1
        assert "Could not read" in capsys.readouterr().err

    def test_schema_mismatch_exits_1(self, calendar_check, monkeypatch, tmp_path, capsys) -> None:
        path = tmp_path / "trips.json"
        path.write_text(json.dumps({"trips": "tomorrow"}), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            run_main(calendar_check, monkeypatch, "--input", str(path))

        assert exc.value.code == 1
        assert capsys.readouterr().out == ""

    def test_missing_file_exits_1(self, calendar_check, monkeypatch, tmp_path) -> None:
        with pytest.raises(SystemExit) as exc:
            run_main(calendar_check, monkeypatch, "--input", str(tmp_path / "absent.json"))

        assert exc.value.code == 1

    def test_missing_field_exits_1_before_any_lookup(self, calendar_check, monkeypatch, tmp_path, capsys) -> None:
        path = tmp_path / "trips.json"
        path.write_text(json.dumps([{"mainTrip": {"id": "t1"}, "candidates": []}]), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            run_main(calendar_check, monkeypatch, "--input", str(path))

        assert exc.value.code == 1
        assert "trips[0].mainTrip is missing required field: originLat" in capsys.readouterr().err


class TestLoadRequest:
    def test_bare_list_is_wrapped(self, calendar_check, tmp_path) -> None:
        path = tmp_path / "trips.json"
        path.write_text(json.dumps([group("t1")]), encoding="utf-8")

        request = calendar_check._load_request(str(path), None)

        assert len(request.trips) == 1
        assert request.detour_threshold is None

    def test_threshold_replaces_request_wide_value_only(self, calendar_check, tmp_path) -> None:
        path = tmp_path / "trips.json"
        body = {"trips": [group("t1", detour_threshold=600), group("t2")], "detourThreshold": 1800}
        path.write_text(json.dumps(body), encoding="utf-8")

        request = calendar_check._load_request(str(path), 1200)

        assert request.detour_threshold == 1200
        assert [g.detour_threshold for g in request.trips] == [600, None]
