"""
Tests for the enumvariants command line.
"""

import json

import pytest

from enumvariants.cli import build_parser, main


DOCUMENT = {
    "types": [
        {
            "name": "Direction",
            "directives": ["rename(uppercase)", "from_str"],
            "variants": ["North", "East", "South", "West"],
        },
        {
            "name": "Weekday",
            "variants": [
                {"ident": "Monday", "directives": ["skip"]},
                {"ident": "Tuesday", "directives": ['rename = "DayAfterMonday"']},
                "Wednesday",
                "Thursday",
            ],
        },
    ]
}


@pytest.fixture
def definitions(tmp_path):
    path = tmp_path / "defs.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    return path


@pytest.fixture
def broken(tmp_path):
    """One valid type, one record type."""
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"types": [
        DOCUMENT["types"][0],
        {"name": "Point", "kind": "struct"},
    ]}), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def no_env_features(monkeypatch):
    monkeypatch.delenv("ENUMVARIANTS_FEATURES", raising=False)


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        """A command must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_options(self):
        """Shared options are accepted by every command."""
        args = build_parser().parse_args(["check", "defs.json", "--features", "serde", "--no-listing", "-v"])
        assert args.command == "check"
        assert args.features == "serde"
        assert args.no_listing is True
        assert args.verbose is True


class TestGenerate:
    """Tests for `enumvariants generate`."""

    def test_to_stdout(self, definitions, capsys):
        """Without -o the module goes to stdout."""
        assert main(["generate", str(definitions)]) == 0
        out = capsys.readouterr().out
        assert "class Direction(Enum):" in out
        assert "class Weekday(Enum):" in out

    def test_to_file(self, definitions, tmp_path, capsys):
        """With -o the module is written and importable."""
        output = tmp_path / "generated.py"
        assert main(["generate", str(definitions), "-o", str(output)]) == 0
        assert "[PASS] Generated 2 types" in capsys.readouterr().out

        namespace = {"__name__": "generated"}
        exec(compile(output.read_text(encoding="utf-8"), str(output), "exec"), namespace)
        assert namespace["Direction"].from_str("SOU") is namespace["Direction"].South
        assert namespace["Weekday"].variants_list_str() == '"DayAfterMonday", "Wednesday", "Thursday"'

    def test_no_header_and_families(self, definitions, capsys):
        """--no-header, --no-iteration and --no-listing shape the output."""
        assert main(["generate", str(definitions), "--no-header", "--no-iteration", "--no-listing"]) == 0
        out = capsys.readouterr().out
        assert not out.startswith("#")
        assert "iter_variants" not in out
        assert "variants_list_str" not in out

    def test_failure(self, broken, capsys):
        """Any failing type fails the command."""
        assert main(["generate", str(broken)]) == 1
        err = capsys.readouterr().err
        assert "[FAIL] Point" in err


class TestCheck:
    """Tests for `enumvariants check`."""

    def test_pass(self, definitions, capsys):
        """Every type passes."""
        assert main(["check", str(definitions)]) == 0
        out = capsys.readouterr().out
        assert "[PASS] Direction (4 variants" in out
        assert "[PASS] Weekday" in out
        assert "2 passed, 0 failed" in out

    def test_fail(self, broken, capsys):
        """Failing types are reported with their error."""
        assert main(["check", str(broken)]) == 1
        out = capsys.readouterr().out
        assert "[PASS] Direction" in out
        assert "[FAIL] Point" in out
        assert "not struct types" in out
        assert "1 passed, 1 failed" in out

    def test_serde_feature(self, tmp_path, capsys):
        """serialize passes only with --features serde."""
        path = tmp_path / "serde.json"
        path.write_text(json.dumps({"name": "Format", "directives": ["serialize"], "variants": ["Xml"]}))

        assert main(["check", str(path)]) == 1
        assert "requires the `serde` feature" in capsys.readouterr().out
        assert main(["check", str(path), "--features", "serde"]) == 0

    def test_verbose_metrics(self, definitions, capsys):
        """-v lists operations and dumps metrics."""
        assert main(["check", str(definitions), "-v"]) == 0
        captured = capsys.readouterr()
        assert "operations: as_str, as_str_abbr" in captured.out
        assert '"generated": 2' in captured.err


class TestTable:
    """Tests for `enumvariants table`."""

    def test_table(self, definitions, capsys):
        """Resolved strings are listed per variant."""
        assert main(["table", str(definitions)]) == 0
        out = capsys.readouterr().out
        assert "Direction (4 variants)" in out
        lines = [line.split() for line in out.splitlines()]
        assert ["North", "NORTH", "NOR", "yes"] in lines
        assert ["Monday", "Monday", "Mon", "no", "(skip)"] in lines
        assert ["Tuesday", "DayAfterMonday", "Day", "yes"] in lines


class TestInputErrors:
    """Unreadable input exits with 1."""

    def test_missing_file(self, tmp_path, capsys):
        """Missing files are reported."""
        assert main(["check", str(tmp_path / "missing.json")]) == 1
        assert "[FAIL]" in capsys.readouterr().err

    def test_invalid_document(self, tmp_path, capsys):
        """Schema errors are listed."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"types": [{"variants": []}]}))
        assert main(["check", str(path)]) == 1
        err = capsys.readouterr().err
        assert "invalid definitions document" in err
        assert "types.0.name" in err

    def test_bad_directive(self, tmp_path, capsys):
        """Directive syntax errors are reported."""
        path = tmp_path / "directive.json"
        path.write_text(json.dumps({"name": "T", "directives": ["rename("]}))
        assert main(["table", str(path)]) == 1
        assert "[FAIL] T:" in capsys.readouterr().err

    def test_unknown_feature(self, definitions, capsys):
        """Unknown features are rejected."""
        assert main(["check", str(definitions), "--features", "yaml"]) == 1
        assert "Unknown feature" in capsys.readouterr().err
