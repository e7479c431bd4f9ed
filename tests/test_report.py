"""Tests for ValidationReport."""

import pathlib as _pathlib

import pluginlint.errors as errors
import pluginlint.report as report_module

Code = errors.ViolationCode


def _report(**kwargs) -> report_module.ValidationReport:
    return report_module.ValidationReport(root=_pathlib.Path("/plugins/mine"), **kwargs)


class TestPassFlag:
    """Tests for passed and exit_code."""

    def test_empty_report_passes(self) -> None:
        report = _report()

        assert report.passed
        assert report.exit_code == report_module.EXIT_OK

    def test_warning_fails(self) -> None:
        report = _report(warnings=[errors.warning(Code.UNREADABLE_FILE, "mode 600", "a.md")])

        assert not report.passed
        assert report.exit_code == report_module.EXIT_FAILED

    def test_violation_fails(self) -> None:
        report = _report(violations=[errors.Violation(Code.INVALID_NAME, "bad")])

        assert report.exit_code == report_module.EXIT_FAILED

    def test_fatal_wins(self) -> None:
        fatal = errors.MissingManifestError("No plugin.json found").to_violation()
        report = _report(fatal=fatal, warnings=[errors.warning(Code.UNREADABLE_FILE, "x")])

        assert report.exit_code == report_module.EXIT_FATAL


class TestFormatting:
    """Tests for problem listing and serialization."""

    def test_problems_are_ordered(self) -> None:
        report = _report(
            fatal=errors.Violation(
                Code.MALFORMED_MANIFEST, "bad json", severity=errors.Severity.FATAL
            ),
            violations=[errors.Violation(Code.INVALID_NAME, "bad name")],
            warnings=[errors.warning(Code.DANGLING_REFERENCE, "gone")],
        )

        assert report.codes() == [
            Code.MALFORMED_MANIFEST,
            Code.INVALID_NAME,
            Code.DANGLING_REFERENCE,
        ]

    def test_format_lines(self) -> None:
        report = _report(
            violations=[
                errors.Violation(
                    Code.INVALID_NAME, "Name 'X' must be kebab-case", "plugin.json:name"
                )
            ],
            warnings=[errors.warning(Code.DANGLING_REFERENCE, "missing")],
        )

        assert report.format_lines() == [
            "error: [InvalidName] plugin.json:name: Name 'X' must be kebab-case",
            "warning: [DanglingReference] missing",
        ]

    def test_to_dict(self) -> None:
        report = _report(
            violations=[errors.Violation(Code.INVALID_NAME, "bad", "plugin.json:name")]
        )

        data = report.to_dict()

        assert data["root"] == "/plugins/mine"
        assert data["passed"] is False
        assert data["fatal"] is None
        assert data["violations"] == [
            {
                "code": "InvalidName",
                "severity": "error",
                "message": "bad",
                "location": "plugin.json:name",
            }
        ]
        assert data["components"] is None
