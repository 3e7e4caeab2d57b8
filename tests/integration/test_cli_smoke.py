import json
from pathlib import Path

import pytest

from roadtable.cli import main, parse_args, run_command
from roadtable.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS


def _feature(properties, coordinates, kind="LineString"):
    return {"type": "Feature", "properties": properties, "geometry": {"type": kind, "coordinates": coordinates}}


def _write_collection(path: Path, features: list[dict]) -> Path:
    path.write_text(json.dumps({"type": "FeatureCollection", "features": features}), encoding="utf-8")
    return path


def _args(tmp_path: Path, *extra: str):
    return parse_args(
        [
            "--input",
            str(tmp_path / "city.geojson"),
            "--output",
            str(tmp_path / "roads.csv"),
            "--run-id",
            "run-test",
            *extra,
        ]
    )


@pytest.mark.integration
def test_cli_writes_expected_road_table(tmp_path: Path, capsys):
    _write_collection(
        tmp_path / "city.geojson",
        [
            _feature({"highway": "primary", "name": "Main St"}, [[-122.1, 37.7], [-122.0, 37.8]]),
            _feature({"highway": "footway", "name": "Park Path"}, [[-122.1, 37.7], [-122.0, 37.8]]),
            _feature({"highway": "residential", "name": ""}, [[-122.1, 37.7], [-122.0, 37.8]]),
            _feature({"highway": "secondary", "name": "High St", "maxspeed": "45"}, [[0.0, 0.0], [1.0, 0.0]]),
            _feature({"highway": "primary", "name": "Square"}, [-122.1, 37.7], kind="Point"),
        ],
    )

    exit_code = run_command(_args(tmp_path))

    assert exit_code == EXIT_SUCCESS
    assert (tmp_path / "roads.csv").read_text(encoding="utf-8").splitlines() == [
        "RoadName;From;To;LengthKm;SpeedLimitKmH",
        'Main St;"37.7;-122.1";"37.8;-122.0";14.175;60',
        'High St;"0.0;0.0";"0.0;1.0";111.195;45',
    ]
    assert f"Saved 2 road segments to {tmp_path / 'roads.csv'}" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_missing_input_leaves_existing_output_untouched(tmp_path: Path, capsys):
    output = tmp_path / "roads.csv"
    output.write_text("previous run\n", encoding="utf-8")

    exit_code = run_command(_args(tmp_path))

    assert exit_code == EXIT_HARD_FAIL
    assert output.read_text(encoding="utf-8") == "previous run\n"
    assert f"ERROR: File {tmp_path / 'city.geojson'} not found." in capsys.readouterr().out


@pytest.mark.integration
def test_cli_missing_input_does_not_create_output(tmp_path: Path):
    assert run_command(_args(tmp_path)) == EXIT_HARD_FAIL
    assert not (tmp_path / "roads.csv").exists()


@pytest.mark.integration
def test_cli_malformed_input_is_reported_without_output(tmp_path: Path, capsys):
    (tmp_path / "city.geojson").write_text("{\"type\": \"FeatureCollection\", \"features\": [", encoding="utf-8")

    exit_code = run_command(_args(tmp_path))

    assert exit_code == EXIT_HARD_FAIL
    assert not (tmp_path / "roads.csv").exists()
    assert "ERROR:" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_bad_policy_config_fails_before_writing(tmp_path: Path):
    _write_collection(tmp_path / "city.geojson", [])
    policy = tmp_path / "policy.yml"
    policy.write_text("drivable_highways: []\ndefault_speeds: {}\nfallback_speed: '50'\n", encoding="utf-8")

    assert run_command(_args(tmp_path, "--policy-config", str(policy))) == EXIT_HARD_FAIL
    assert not (tmp_path / "roads.csv").exists()


@pytest.mark.integration
def test_cli_writes_report_and_log(tmp_path: Path):
    _write_collection(
        tmp_path / "city.geojson",
        [
            _feature({"highway": "motorway", "name": "M1"}, [[0.0, 0.0], [1.0, 0.0]]),
            _feature({"highway": "service", "name": "Yard"}, [[0.0, 0.0], [1.0, 0.0]]),
            _feature({"highway": "primary", "name": "Broken"}, [[0.0, 0.0], ["x", 0.0]]),
        ],
    )

    exit_code = run_command(
        _args(tmp_path, "--report", str(tmp_path / "report.json"), "--log-dir", str(tmp_path / "logs"), "--log-level", "INFO")
    )

    assert exit_code == EXIT_SUCCESS
    report = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert report["features_in"] == 3
    assert report["records_out"] == 1
    assert report["rejected"]["highway_not_drivable"] == 1
    assert report["rejected"]["malformed_geometry"] == 1
    assert report["status"] == "success"
    log_lines = (tmp_path / "logs" / "run-test.log.jsonl").read_text(encoding="utf-8").splitlines()
    stages = [json.loads(line)["stage"] for line in log_lines]
    assert stages == ["read", "read", "extract", "export"]


@pytest.mark.integration
def test_main_uses_default_paths_in_working_directory(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _write_collection(tmp_path / "city.geojson", [_feature({"highway": "trunk", "name": "A1"}, [[0.0, 0.0], [0.0, 1.0]])])

    assert main([]) == EXIT_SUCCESS
    assert (tmp_path / "roads.csv").exists()
    assert "Saved 1 road segments to roads.csv" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_extreme_coordinates_do_not_abort_the_run(tmp_path: Path, capsys):
    _write_collection(
        tmp_path / "city.geojson",
        [
            _feature({"highway": "primary", "name": "Far Out"}, [[0, 1e308], [0, -1e308]]),
            _feature({"highway": "primary", "name": "Huge Int"}, [[0, 0], [10**400, 0]]),
            _feature({"highway": "primary", "name": "Main St"}, [[-122.1, 37.7], [-122.0, 37.8]]),
        ],
    )

    assert run_command(_args(tmp_path)) == EXIT_SUCCESS
    lines = (tmp_path / "roads.csv").read_text(encoding="utf-8").splitlines()
    assert [line.split(";", 1)[0] for line in lines] == ["RoadName", "Far Out", "Main St"]
    assert "Saved 2 road segments" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_unwritable_report_exits_hard_fail(tmp_path: Path, capsys):
    _write_collection(tmp_path / "city.geojson", [_feature({"highway": "trunk", "name": "A1"}, [[0.0, 0.0], [0.0, 1.0]])])
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory\n", encoding="utf-8")

    exit_code = run_command(_args(tmp_path, "--report", str(blocker / "report.json")))

    assert exit_code == EXIT_HARD_FAIL
    assert "ERROR: Cannot write run report" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_missing_overlay_policy_fails_before_writing(tmp_path: Path):
    _write_collection(tmp_path / "city.geojson", [])
    policy = Path(__file__).resolve().parents[2] / "config" / "road_policy.yml"

    exit_code = run_command(
        _args(tmp_path, "--policy-config", str(policy), "--overlay-policy-config", str(tmp_path / "absent.yml"))
    )

    assert exit_code == EXIT_HARD_FAIL
    assert not (tmp_path / "roads.csv").exists()
