import csv

from condenserlab.controller.calculator import calculate
from condenserlab.model.io import CSV_HEADER, IOManager
from condenserlab.model.readings import Reading


def test_export_readings_csv(tmp_path):
    readings = [
        calculate(Reading(id=1, time_seconds=10.0, initial_deflection=100.0, final_deflection=50.0), 1.0),
        Reading(id=2, time_seconds=2.5, initial_deflection=100.0, final_deflection=99.9),
    ]
    path = tmp_path / "readings.csv"

    assert IOManager.export_readings_csv(readings, str(path)) == 2

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == CSV_HEADER
    assert rows[1] == ["1", "10.00", "100.0", "50.0", "14.43"]
    assert rows[2] == ["2", "2.50", "100.0", "99.9", ""]
