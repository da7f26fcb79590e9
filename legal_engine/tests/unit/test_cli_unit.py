"""
Unit tests for the legal_cli command-line script.
"""

import argparse
import json

import pytest

from legal_engine.scripts.legal_cli import (
    EXIT_ENGINE_ERROR,
    EXIT_IO_ERROR,
    EXIT_OK,
    main,
    parse_variables,
)


@pytest.fixture
def contract_file(tmp_path, sample_contract_text):
    path = tmp_path / "contract.txt"
    path.write_text(sample_contract_text, encoding="utf-8")
    return path


def _run(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


class TestParseVariables:
    def test_key_value_pairs(self):
        assert parse_variables(["party_a=Acme Corp", "formula=a=b"]) == {
            "party_a": "Acme Corp",
            "formula": "a=b",
        }

    def test_empty_value_allowed(self):
        assert parse_variables(["party_a="]) == {"party_a": ""}

    @pytest.mark.parametrize("pair", ["party_a", "=value"])
    def test_invalid_pair(self, pair):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_variables([pair])


class TestCommands:
    """Tests for each CLI command."""

    def test_list(self, capsys):
        code, output = _run(capsys, ["--list"])

        assert code == EXIT_OK
        assert output["count"] == 7
        assert [t["id"] for t in output["templates"]][0] == "nda"

    def test_list_by_language(self, capsys):
        code, output = _run(capsys, ["--list", "--language", "fr"])

        assert code == EXIT_OK
        assert [t["id"] for t in output["templates"]] == ["dpa", "tos", "privacy"]

    def test_compile(self, capsys):
        code, output = _run(capsys, [
            "--compile", "nda",
            "--var", "party_a=Acme Corp",
            "--var", "party_b=Beta Inc",
        ])

        assert code == EXIT_OK
        assert output["variables_applied"] == 2
        assert output["missing_variables"] == ["effective_date", "jurisdiction"]

    def test_analyze(self, capsys, contract_file):
        code, output = _run(capsys, ["--analyze", str(contract_file), "--language", "en"])

        assert code == EXIT_OK
        assert output["language"] == "en"
        assert output["document_type"] == "contract"
        assert len(output["clauses"]) == 7

    def test_risk(self, capsys, contract_file):
        code, output = _run(capsys, ["--risk", str(contract_file)])

        assert code == EXIT_OK
        assert len(output["risk_factors"]) == 6
        assert 0.0 <= output["overall_score"] <= 1.0


class TestErrors:
    """Tests for error reporting and exit codes."""

    def test_unknown_template(self, capsys):
        code, output = _run(capsys, ["--compile", "lease"])

        assert code == EXIT_ENGINE_ERROR
        assert output["error"] == "TemplateNotFound"
        assert output["details"] == {"template_id": "lease"}

    def test_empty_document(self, capsys, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("   \n", encoding="utf-8")
        code, output = _run(capsys, ["--analyze", str(path), "--language", "en"])

        assert code == EXIT_ENGINE_ERROR
        assert output["error"] == "EmptyDocument"

    def test_unsupported_language(self, capsys, contract_file):
        code, output = _run(capsys, ["--analyze", str(contract_file), "--language", "xx"])

        assert code == EXIT_ENGINE_ERROR
        assert output["error"] == "UnsupportedLanguage"

    def test_missing_file(self, capsys, tmp_path):
        code = main(["--analyze", str(tmp_path / "missing.txt")])

        assert code == EXIT_IO_ERROR
        assert "Cannot read document" in capsys.readouterr().err

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_malformed_variable(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--compile", "nda", "--var", "party_a"])
        assert exc_info.value.code == 2

    def test_invalid_environment_setting(self, monkeypatch, capsys):
        monkeypatch.setenv("LEGAL_ENGINE_WORDS_PER_PAGE", "many")
        with pytest.raises(SystemExit) as exc_info:
            main(["--list"])

        assert exc_info.value.code == 2
        assert "LEGAL_ENGINE_" in capsys.readouterr().err
