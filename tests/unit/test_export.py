from pathlib import Path

from roadtable.common.models import RoadRecord
from roadtable.pipeline.export import format_length, write_roads_csv


def _record(name="Main St", length=14.175, speed="60"):
    return RoadRecord(road_name=name, origin="37.7;-122.1", destination="37.8;-122.0", length_km=length, speed_limit=speed)


def test_format_length_uses_period_and_shortest_repr():
    assert format_length(14.175) == "14.175"
    assert format_length(0.0) == "0.0"
    assert format_length(2.5) == "2.5"


def test_write_roads_csv_header_and_rows(tmp_path: Path):
    out = tmp_path / "roads.csv"
    write_roads_csv(out, [_record(), _record(name="Side St", length=0.0, speed="30")])

    assert out.read_bytes() == (
        b"RoadName;From;To;LengthKm;SpeedLimitKmH\r\n"
        b'Main St;"37.7;-122.1";"37.8;-122.0";14.175;60\r\n'
        b'Side St;"37.7;-122.1";"37.8;-122.0";0.0;30\r\n'
    )


def test_write_roads_csv_quotes_names_with_delimiter_or_quotes(tmp_path: Path):
    out = tmp_path / "roads.csv"
    write_roads_csv(out, [_record(name='Rue "A"; Nord')])
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[1].startswith('"Rue ""A""; Nord";')


def test_write_roads_csv_overwrites_existing_file(tmp_path: Path):
    out = tmp_path / "roads.csv"
    out.write_text("stale content\n" * 10, encoding="utf-8")
    write_roads_csv(out, [])
    assert out.read_bytes() == b"RoadName;From;To;LengthKm;SpeedLimitKmH\r\n"


def test_write_roads_csv_keeps_unicode_names(tmp_path: Path):
    out = tmp_path / "nested" / "roads.csv"
    write_roads_csv(out, [_record(name="Straße des 17. Juni")])
    assert "Straße des 17. Juni" in out.read_text(encoding="utf-8")
