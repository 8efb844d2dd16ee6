"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from authordedupe.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "authordedupe" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("consolidate", "deanonymize", "newcomers", "activity"):
        assert command in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# consolidate command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_consolidate_writes_roster(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    """Test consolidate writes one line per contributor."""
    out = tmp_path / "roster.txt"

    result = runner.invoke(cli, ["consolidate", str(fixtures_dir / "authors.txt"), "-o", str(out)])

    assert result.exit_code == 0
    assert "Wrote 4 contributors" in result.output
    assert len(out.read_text(encoding="utf-8").splitlines()) == 4


@pytest.mark.unit
def test_consolidate_with_extra_common_names(runner: CliRunner, tmp_path: Path) -> None:
    """Test --common-names keeps a project-specific name from linking people."""
    authors = tmp_path / "authors.txt"
    authors.write_text("Valentin <v@one.example>\nValentin <v@two.example>\n", encoding="utf-8")
    common = tmp_path / "common.txt"
    common.write_text("valentin\n", encoding="utf-8")
    out = tmp_path / "roster.txt"

    merged = runner.invoke(cli, ["consolidate", str(authors), "-o", str(out)])
    assert merged.exit_code == 0
    assert "Wrote 1 contributors" in merged.output

    result = runner.invoke(
        cli, ["consolidate", str(authors), "-o", str(out), "--common-names", str(common)]
    )

    assert result.exit_code == 0
    assert "Wrote 2 contributors" in result.output


@pytest.mark.unit
def test_consolidate_events_file(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    """Test --events writes a run log ending in success."""
    out = tmp_path / "roster.txt"
    events_path = tmp_path / "events.jsonl"

    result = runner.invoke(
        cli,
        [
            "consolidate",
            str(fixtures_dir / "authors.txt"),
            "-o",
            str(out),
            "--names",
            str(fixtures_dir / "names.csv"),
            "--events",
            str(events_path),
        ],
    )

    assert result.exit_code == 0
    events = [json.loads(line) for line in events_path.read_text().splitlines()]
    names = [e["event"] for e in events]
    assert names[0] == "run_started"
    assert "name_feed_record_skipped" in names
    assert "artifact_written" in names
    assert events[-1]["event"] == "run_finished"
    assert events[-1]["data"]["status"] == "success"


@pytest.mark.unit
def test_consolidate_bad_feed_fails(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    """Test an invalid name feed exits 1 and logs an error event."""
    feed = tmp_path / "names.csv"
    feed.write_text("bogus;1;2\n", encoding="utf-8")
    events_path = tmp_path / "events.jsonl"

    result = runner.invoke(
        cli,
        [
            "consolidate",
            str(fixtures_dir / "authors.txt"),
            "-o",
            str(tmp_path / "roster.txt"),
            "--names",
            str(feed),
            "--events",
            str(events_path),
        ],
    )

    assert result.exit_code == 1
    assert "Error" in result.output
    events = [json.loads(line) for line in events_path.read_text().splitlines()]
    errors = [e for e in events if e["event"] == "error"]
    assert errors[0]["data"]["exception_class"] == "NameFeedError"
    assert events[-1]["data"]["status"] == "failed"


@pytest.mark.unit
def test_consolidate_missing_input(runner: CliRunner, tmp_path: Path) -> None:
    """Test a missing input file is rejected by click."""
    result = runner.invoke(
        cli, ["consolidate", str(tmp_path / "missing.txt"), "-o", str(tmp_path / "out.txt")]
    )

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# deanonymize command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_deanonymize_prints_canonical_names(runner: CliRunner, tmp_path: Path) -> None:
    """Test one output line per input line, co-authors joined by ', '."""
    roster = tmp_path / "roster.txt"
    roster.write_text("Jane Doe <jane@example.org>;jdoe\n", encoding="utf-8")

    result = runner.invoke(
        cli,
        ["deanonymize", "jdoe", "jdoe and Carol Danvers", "--author-list", str(roster)],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Jane Doe <jane@example.org>",
        "Jane Doe <jane@example.org>, Carol Danvers",
    ]


@pytest.mark.unit
def test_deanonymize_requires_input(runner: CliRunner) -> None:
    """Test deanonymize without author lines is a usage error."""
    result = runner.invoke(cli, ["deanonymize"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# newcomers / activity commands
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_newcomers_raw_authors(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    """Test newcomers without a resolver counts raw author strings."""
    out = tmp_path / "newcomers.csv"

    result = runner.invoke(cli, ["newcomers", str(fixtures_dir / "git_log.txt"), "-o", str(out)])

    assert result.exit_code == 0
    assert "Found 4 contributors" in result.output


@pytest.mark.unit
def test_newcomers_with_author_list(
    runner: CliRunner, fixtures_dir: Path, tmp_path: Path
) -> None:
    """Test aliases collapse with a roster and --authors-out lists them sorted."""
    roster = tmp_path / "roster.txt"
    roster.write_text(
        "Jane Doe <jane@example.org>;jdoe <jane@example.org>;Jane D. [jdoe] <jane@example.org>\n",
        encoding="utf-8",
    )
    out = tmp_path / "newcomers.csv"
    authors_out = tmp_path / "authors.txt"

    result = runner.invoke(
        cli,
        [
            "newcomers",
            str(fixtures_dir / "git_log.txt"),
            "-o",
            str(out),
            "--author-list",
            str(roster),
            "--authors-out",
            str(authors_out),
        ],
    )

    assert result.exit_code == 0
    assert "Found 2 contributors" in result.output
    assert out.read_text(encoding="utf-8").splitlines() == [
        "author;date",
        "Jane Doe <jane@example.org>;2014-02-01 01:30:00Z",
        "Bob Builder <bob@builders.example>;2014-03-03 18:00:00Z",
    ]
    assert authors_out.read_text(encoding="utf-8").splitlines() == [
        "Bob Builder <bob@builders.example>",
        "Jane Doe <jane@example.org>",
    ]


@pytest.mark.unit
def test_newcomers_broken_log_fails(runner: CliRunner, tmp_path: Path) -> None:
    """Test a structurally broken log exits 1."""
    log = tmp_path / "log.txt"
    log.write_text("Author: Jane Doe\n", encoding="utf-8")

    result = runner.invoke(cli, ["newcomers", str(log), "-o", str(tmp_path / "out.csv")])

    assert result.exit_code == 1
    assert "Author without date" in result.output


@pytest.mark.unit
def test_activity_writes_months(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    """Test activity writes one CSV row per month."""
    out = tmp_path / "activity.csv"

    result = runner.invoke(cli, ["activity", str(fixtures_dir / "git_log.txt"), "-o", str(out)])

    assert result.exit_code == 0
    assert "Wrote 2 months" in result.output
    assert out.read_text(encoding="utf-8").splitlines()[1:] == ["2014-02;2;2", "2014-03;2;2"]


# ---------------------------------------------------------------------------
# Git log commands without a curated author list
# ---------------------------------------------------------------------------


def _write_log(path: Path, authors: list[str]) -> Path:
    """Write a git log export with one commit per author, oldest listed first."""
    entries = [
        f"commit {i:040x}\nAuthor: {author}\n"
        f"Date:   2014-03-{i + 1:02d} 10:00:00 +0000\n\n    Change {i}\n"
        for i, author in enumerate(authors)
    ]
    path.write_text("\n".join(reversed(entries)), encoding="utf-8")
    return path


@pytest.mark.unit
def test_newcomers_with_name_feed_only(runner: CliRunner, tmp_path: Path) -> None:
    """Test a feed m2m link merges two spellings found in the log."""
    log = _write_log(
        tmp_path / "log.txt",
        ["Jane Doe <jane@example.org>", "J. Smith <jane.doe@corp.example>"],
    )
    feed = tmp_path / "names.csv"
    feed.write_text("m2m;x;jane@example.org;jane.doe@corp.example\n", encoding="utf-8")
    out = tmp_path / "newcomers.csv"

    result = runner.invoke(cli, ["newcomers", str(log), "-o", str(out), "--names", str(feed)])

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").splitlines() == [
        "author;date",
        "Jane Doe <jane@example.org>;2014-03-01 10:00:00Z",
    ]


@pytest.mark.unit
def test_newcomers_same_name_different_mails_with_feed(runner: CliRunner, tmp_path: Path) -> None:
    """Test one mail-linked person with two mails is one newcomer."""
    log = _write_log(
        tmp_path / "log.txt",
        ["Jane Doe <jane@example.org>", "Jane Doe <jane.doe@corp.example>"],
    )
    feed = tmp_path / "names.csv"
    feed.write_text("m2m;x;jane@example.org;jane.doe@corp.example\n", encoding="utf-8")
    out = tmp_path / "newcomers.csv"

    result = runner.invoke(cli, ["newcomers", str(log), "-o", str(out), "--names", str(feed)])

    assert result.exit_code == 0
    assert "Found 1 contributors" in result.output


@pytest.mark.unit
def test_newcomers_without_feed_keeps_unlinked_spellings(
    runner: CliRunner, tmp_path: Path
) -> None:
    """Test spellings sharing no name or mail stay apart without a feed."""
    log = _write_log(
        tmp_path / "log.txt",
        ["Jane Doe <jane@example.org>", "J. Smith <jane.doe@corp.example>"],
    )
    common = tmp_path / "common.txt"
    common.write_text("Zed\n", encoding="utf-8")
    out = tmp_path / "newcomers.csv"

    result = runner.invoke(
        cli, ["newcomers", str(log), "-o", str(out), "--common-names", str(common)]
    )

    assert result.exit_code == 0
    assert "Found 2 contributors" in result.output


@pytest.mark.unit
@pytest.mark.parametrize(
    ("common_name", "expected_rows"),
    [("Zed", 1), ("Pat Quinn", 2)],
)
def test_common_names_alone_resolves_log_authors(
    runner: CliRunner, tmp_path: Path, common_name: str, expected_rows: int
) -> None:
    """Test --common-names by itself groups log spellings and is honored."""
    log = _write_log(
        tmp_path / "log.txt",
        ["Pat Quinn <pq@one.example>", "Pat Quinn <pq@two.example>"],
    )
    common = tmp_path / "common.txt"
    common.write_text(f"{common_name}\n", encoding="utf-8")
    out = tmp_path / "newcomers.csv"

    result = runner.invoke(
        cli, ["newcomers", str(log), "-o", str(out), "--common-names", str(common)]
    )

    assert result.exit_code == 0
    assert len(out.read_text(encoding="utf-8").splitlines()) == expected_rows + 1


@pytest.mark.unit
def test_activity_with_name_feed_only(runner: CliRunner, tmp_path: Path) -> None:
    """Test activity counts feed-linked spellings as one contributor."""
    log = _write_log(
        tmp_path / "log.txt",
        ["Jane Doe <jane@example.org>", "J. Smith <jane.doe@corp.example>"],
    )
    feed = tmp_path / "names.csv"
    feed.write_text("m2m;x;jane@example.org;jane.doe@corp.example\n", encoding="utf-8")
    out = tmp_path / "activity.csv"

    result = runner.invoke(cli, ["activity", str(log), "-o", str(out), "--names", str(feed)])

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").splitlines() == ["month;active;newcomers", "2014-03;1;1"]
