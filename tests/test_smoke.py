"""Smoke tests for the end-to-end flow: CLI, report and PDF output."""

import json
from datetime import date

import pytest

from shifthelper.cli import (
    EXIT_INPUT_ERROR,
    create_sample_employees,
    create_sample_establishment,
    main,
)
from shifthelper.output.report_generator import ReportGenerator
from shifthelper.scheduling.weekly_scheduler import WeeklyScheduler
from shifthelper.validation.validator import ScheduleValidator

WEEK = date(2024, 1, 14)


@pytest.fixture
def week():
    employees = create_sample_employees(8, WEEK)
    return WeeklyScheduler().build_week(WEEK, create_sample_establishment(), employees)


@pytest.fixture
def input_file(tmp_path):
    doc = {
        "weekStartDate": "2024-01-17",
        "establishment": {
            "id": "est-1",
            "name": "Padaria",
            "operatingHours": {
                str(d): {"isOpen": True, "openTime": "06:00", "closeTime": "22:00"}
                for d in range(1, 7)
            },
        },
        "employees": [
            {"id": "A", "name": "Ana", "recurringAvailability": {"2": {"available": False}}},
            {"id": "B", "name": "Bruno"},
            {"id": "C", "name": "Carla", "status": "pending"},
        ],
    }
    path = tmp_path / "input.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


class TestSmoke:
    """End-to-end smoke tests for the scheduling system."""

    def test_sample_data_produces_valid_week(self, week):
        employees = create_sample_employees(8, WEEK)
        result = ScheduleValidator().validate(week, create_sample_establishment(), employees)

        assert result.is_valid, [str(e) for e in result.errors]
        assert not week.days[0].is_open
        assert week.total_shifts == 18

    def test_report(self, week):
        report = ReportGenerator().generate_to_string(week)

        assert "WEEK SCHEDULE - 2024-01-14 to 2024-01-20" in report
        assert "Domingo 2024-01-14: closed" in report
        assert "Manhã" in report

    def test_report_file(self, week, tmp_path):
        path = tmp_path / "week.txt"
        content = ReportGenerator().generate(week, path)
        assert path.read_text(encoding="utf-8") == content

    def test_pdf_buffer(self, week):
        pytest.importorskip("reportlab")
        from shifthelper.output.pdf_generator import PDFGenerator

        buffer = PDFGenerator().generate_to_buffer(week)
        assert buffer.read(4) == b"%PDF"


class TestCli:
    """Tests for the command-line entry point."""

    def test_generate(self, input_file, tmp_path, capsys):
        out = tmp_path / "week.json"
        report = tmp_path / "week.txt"
        code = main(["generate", str(input_file), "--json", str(out), "--report", str(report)])

        assert code == 0
        doc = json.loads(out.read_text(encoding="utf-8"))
        assert doc["weekStartDate"] == "2024-01-14"
        assert doc["totalShifts"] == 18
        assert report.exists()
        assert "Validation: PASSED" in capsys.readouterr().out

    def test_week_override(self, input_file, tmp_path):
        out = tmp_path / "week.json"
        code = main(["generate", str(input_file), "--week", "2024-01-21", "--json", str(out)])

        assert code == 0
        assert json.loads(out.read_text(encoding="utf-8"))["weekStartDate"] == "2024-01-21"

    def test_invalid_input(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"weekStartDate": "2024-01-14", "employees": []}))

        assert main(["generate", str(path)]) == EXIT_INPUT_ERROR
        assert "establishment" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main(["generate", str(tmp_path / "missing.json")]) == EXIT_INPUT_ERROR

    def test_demo(self, capsys):
        assert main(["demo", "--count", "6", "--log-level", "DEBUG"]) == 0
        assert "Generating demo schedule for 6 employees" in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 1
