from __future__ import annotations

from typer.testing import CliRunner

from annual_report.cli.commands import app

runner = CliRunner()


def test_generate_writes_pdf(seeded_repository, database_url, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    target = tmp_path / "acme.pdf"
    result = runner.invoke(
        app,
        ["generate", "2024-25", "--user-id", "user-1", "--database-url", database_url, "--output", str(target)],
    )
    assert result.exit_code == 0, result.output
    assert target.read_bytes().startswith(b"%PDF")


def test_generate_uses_default_filename(seeded_repository, database_url, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("LEDGER_USER_ID", "user-1")
    monkeypatch.setenv("LEDGER_DATABASE_URL", database_url)
    result = runner.invoke(app, ["generate", "2024"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "acme-traders-private-limited-annual-report-2024-25.pdf").exists()


def test_generate_statements_only(seeded_repository, database_url, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    result = runner.invoke(
        app, ["generate", "2024-25", "--user-id", "user-1", "--database-url", database_url, "--statements-only"]
    )
    assert result.exit_code == 0, result.output
    target = tmp_path / "acme-traders-private-limited-financial-statements-2024-25.pdf"
    assert target.read_bytes().startswith(b"%PDF")
    assert not (tmp_path / "acme-traders-private-limited-annual-report-2024-25.pdf").exists()


def test_generate_reports_errors(seeded_repository, database_url, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    result = runner.invoke(app, ["generate", "2024-25", "--user-id", "ghost", "--database-url", database_url])
    assert result.exit_code == 1
    assert "Report generation failed" in result.output

    result = runner.invoke(
        app, ["generate", "2024-25", "--user-id", "user-1", "--database-url", database_url, "--strict-balance"]
    )
    assert result.exit_code == 1
    assert "Balance sheet does not balance" in result.output


def test_batch_continues_past_bad_years(seeded_repository, database_url, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    result = runner.invoke(
        app, ["batch", "2023-24", "2024-25", "not-a-year", "--user-id", "user-1", "--database-url", database_url]
    )
    assert result.exit_code == 1
    assert (tmp_path / "acme-traders-private-limited-annual-report-2023-24.pdf").exists()
    assert (tmp_path / "acme-traders-private-limited-annual-report-2024-25.pdf").exists()


def test_plan_lists_sections_and_stages(tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    result = runner.invoke(app, ["plan"])
    assert result.exit_code == 0
    assert "Balance Sheet" in result.output
    assert "serialize" in result.output


def test_init_db_creates_schema(tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    db_path = tmp_path / "fresh" / "ledger.db"
    result = runner.invoke(app, ["init-db", "--database-url", f"sqlite:///{db_path}"])
    assert result.exit_code == 0, result.output
    assert db_path.exists()
