"""
End-to-end tests — full audit through the use cases and the CLI.

Uses the bundled reference data and a realistic detected-stack
artifact. Click's CliRunner keeps everything in-process.
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from slimlibs.core.use_cases.audit import run_audit
from slimlibs.core.use_cases.data_check import check_data
from slimlibs.main import cli


@pytest.fixture()
def page_stacks(tmp_path: Path) -> Path:
    """Detected stacks for a page using several heavy libraries."""
    path = tmp_path / "stacks.yml"
    path.write_text(textwrap.dedent("""\
        Stacks:
          - detector: js
            id: jquery
            name: jQuery
            npm: jquery
            version: 1.12.4
          - detector: js
            id: moment
            name: Moment.js
            npm: moment
          - detector: js
            id: jquery-fast
            name: jQuery (Fast path)
            npm: jquery
            version: 3.5.1
          - detector: js
            id: underscore
            name: Underscore
            npm: underscore
          - detector: js
            id: wordpress
            name: WordPress
          - detector: js
            id: react
            name: React
            npm: react
            version: 16.13.1
    """))
    return path


class TestAuditUseCase:
    def test_run_audit(self, page_stacks: Path):
        result = run_audit(page_stacks)
        assert result.error is None
        assert result.detections_loaded == 6

        report = result.report
        assert report is not None
        # jquery, moment, underscore are known; react/wordpress are not
        assert report.libraries_checked == 3
        # underscore's only suggestion is larger
        assert [i.name.text for i in report.items] == ["jquery", "moment"]

        jquery = report.items[0]
        # First detection wins: 1.12.4, not 3.5.1
        assert jquery.transfer_size == 33906
        assert [s.suggestion.text for s in jquery.sub_items] == ["umbrellajs", "cash-dom"]

        moment = report.items[1]
        assert moment.transfer_size == 72101
        assert [s.suggestion.text for s in moment.sub_items] == ["dayjs", "date-fns", "luxon"]
        assert moment.best_savings == 72101 - 2927

    def test_run_audit_to_dict(self, page_stacks: Path):
        data = run_audit(page_stacks).to_dict()
        json.dumps(data)
        assert data["report"]["replaceable_count"] == 2
        assert data["report"]["potential_savings"] == (33906 - 2996) + (72101 - 2927)

    def test_run_audit_error(self, tmp_path: Path):
        result = run_audit(tmp_path / "missing.yml")
        assert result.report is None
        assert result.error
        assert result.to_dict() == {"error": result.error}


class TestDataCheckUseCase:
    def test_bundled_data_valid(self):
        result = check_data()
        assert result.valid
        assert result.errors == []
        assert result.library_count > 0
        assert any("underscore" in w for w in result.warnings)

    def test_unloadable_stats(self, tmp_path: Path):
        path = tmp_path / "stats.json"
        path.write_text("{broken")
        result = check_data(stats_path=path)
        assert not result.valid
        assert "Invalid JSON" in result.errors[0]

    def test_suggestions_without_stats(self, tmp_path: Path, stats_file: Path):
        path = tmp_path / "suggestions.json"
        path.write_text(json.dumps({"unknown-lib": ["liba"]}))
        result = check_data(stats_path=stats_file, suggestions_path=path)
        assert result.valid
        assert any("never audited" in w for w in result.warnings)


class TestFullCLIFlow:
    def test_check_then_audit(self, page_stacks: Path):
        runner = CliRunner()

        check = runner.invoke(cli, ["data", "check"])
        assert check.exit_code == 0

        audit = runner.invoke(cli, ["audit", str(page_stacks), "--json"])
        assert audit.exit_code == 0
        report = json.loads(audit.output)["report"]
        assert report["title"] == "Replace unnecessarily large JavaScript libraries"
        names = [i["name"]["text"] for i in report["details"]["items"]]
        assert names == ["jquery", "moment"]
