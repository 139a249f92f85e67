import logging

from app.logging.logger import Log, _RunIdFilter


class TestRunScope:
    def test_sets_and_restores_run_id(self) -> None:
        assert Log.current_run_id() == "-"
        with Log.run_scope("abc123"):
            assert Log.current_run_id() == "abc123"
        assert Log.current_run_id() == "-"

    def test_restores_run_id_after_exception(self) -> None:
        try:
            with Log.run_scope("boom"):
                raise RuntimeError("stage crashed")
        except RuntimeError:
            pass
        assert Log.current_run_id() == "-"

    def test_filter_stamps_records(self) -> None:
        record = logging.LogRecord("triage", logging.INFO, __file__, 1, "msg", None, None)
        with Log.run_scope("run-7"):
            assert _RunIdFilter().filter(record) is True
        assert record.run_id == "run-7"  # type: ignore[attr-defined]
