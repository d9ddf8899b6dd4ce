from kamatsuka.results import (
    ComparisonResult,
    ResultKind,
    count_results,
    report_results,
)


def _sample():
    return [
        ComparisonResult(ResultKind.MATCH),
        ComparisonResult(ResultKind.MISSING, "field1"),
        ComparisonResult(ResultKind.EXTRA, "field2"),
        ComparisonResult(ResultKind.MISMATCH, "type mismatch"),
        ComparisonResult(ResultKind.MISSING, "field3"),
        ComparisonResult(ResultKind.MISSING_IN_STONE, "asyncPollError"),
        ComparisonResult(ResultKind.UNDEFINED_REFERENCE, "asyncPollError"),
    ]


def test_comparison_result_counts():
    counts = count_results(_sample())
    assert counts[ResultKind.MISSING] == 2
    assert counts[ResultKind.EXTRA] == 1
    assert counts[ResultKind.MISMATCH] == 1
    assert counts[ResultKind.MISSING_IN_STONE] == 1
    assert counts[ResultKind.UNDEFINED_REFERENCE] == 1
    assert counts[ResultKind.MATCH] == 1


def test_count_results_empty_has_every_kind():
    counts = count_results([])
    assert set(counts) == set(ResultKind)
    assert sum(counts.values()) == 0


def test_report_results(capsys):
    counts = report_results(
        [ComparisonResult(ResultKind.MATCH), ComparisonResult(ResultKind.MISSING, "test")]
    )
    out = capsys.readouterr().out
    assert counts[ResultKind.MATCH] == 1
    assert counts[ResultKind.MISSING] == 1
    assert "MISSING: test" in out
    assert "  1 Matches" in out
    assert "  1 Missing\n" in out
    assert "All checks passed" not in out


def test_report_all_labels(capsys):
    report_results(_sample())
    out = capsys.readouterr().out
    assert "EXTRA: field2" in out
    assert "MISMATCH: type mismatch" in out
    assert "MISSING IN STONE: asyncPollError" in out
    assert "UNDEFINED REFERENCE: asyncPollError" in out
    assert "  2 Missing\n" in out
    assert "  1 Undefined References" in out


def test_report_all_passed(capsys):
    report_results([ComparisonResult(ResultKind.MATCH)] * 3)
    out = capsys.readouterr().out
    assert "  3 Matches" in out
    assert out.rstrip().endswith("✓ All checks passed!")