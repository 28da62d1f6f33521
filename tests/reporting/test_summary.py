import logging

from content_backfill.reporting.summary import ScrapeStats, format_summary, log_summary


def _stats(total, lightweight_success=0, robust_success=0, **kwargs):
    stats = ScrapeStats(["lightweight", "robust"], total=total, **kwargs)
    stats.succeeded["lightweight"] = lightweight_success
    stats.succeeded["robust"] = robust_success
    return stats


def test_success_rate_rounds_to_one_decimal():
    assert _stats(4, lightweight_success=2, robust_success=1).success_rate == 75.0
    assert _stats(3, lightweight_success=1).success_rate == 33.3
    assert _stats(3, lightweight_success=2).success_rate == 66.7


def test_success_rate_for_empty_run_is_none():
    assert _stats(0).success_rate is None


def test_record_updates_named_counters():
    stats = ScrapeStats(["lightweight", "robust"])
    stats.record("lightweight", False)
    stats.record("robust", True)
    stats.record("lightweight", True)

    assert stats.lightweight_success == 1
    assert stats.lightweight_failed == 1
    assert stats.robust_success == 1
    assert stats.robust_failed == 0
    assert stats.total_success == 2


def test_format_summary_lines():
    stats = _stats(4, lightweight_success=2, robust_success=1, skipped=1)
    stats.failed["lightweight"] = 1

    assert format_summary(stats) == [
        "Total articles processed: 4",
        "Lightweight - Success: 2, Failed: 1",
        "Robust - Success: 1, Failed: 0",
        "Skipped (no URL): 1",
        "Overall success rate: 75.0%",
    ]


def test_empty_run_is_reported_as_no_op(caplog):
    with caplog.at_level(logging.INFO):
        log_summary(_stats(0))

    assert "nothing to do" in caplog.text
    assert "success rate" not in caplog.text


def test_as_dict():
    stats = _stats(2, lightweight_success=1)

    assert stats.as_dict() == {
        "total": 2,
        "skipped": 0,
        "succeeded": {"lightweight": 1, "robust": 0},
        "failed": {"lightweight": 0, "robust": 0},
        "success_rate": 50.0,
    }


def test_dry_run_summary_has_no_success_rate(caplog):
    stats = ScrapeStats(["lightweight", "robust"], total=3, skipped=1, dry_run=True)
    stats.plan("lightweight")
    stats.plan("robust")

    assert format_summary(stats) == [
        "Articles selected: 3",
        "Would start with lightweight: 1",
        "Would start with robust: 1",
        "Skipped (no URL): 1",
        "Nothing was fetched or written",
    ]

    with caplog.at_level(logging.INFO):
        log_summary(stats)

    assert "=== Dry Run Complete ===" in caplog.text
    assert "Scraping Complete" not in caplog.text
    assert "success rate" not in caplog.text
