"""Tests for src/frequencies/scan.py -- column selection, (HF) bucketing, freqs_df."""
import pandas as pd
import pytest
from structlog.testing import capture_logs

from src.frequencies.scan import (
    HF_LABEL,
    NO_INFO_MESSAGE,
    ExclusionReport,
    column_frequencies,
    freqs_df,
    scan_columns,
)


@pytest.fixture
def ids_and_group():
    return pd.DataFrame({"id": range(20), "grp": ["a", "b"] * 10})


class TestScanColumns:
    def test_high_cardinality_excluded(self, ids_and_group):
        with capture_logs() as logs:
            columns, report = scan_columns(ids_and_group)
        assert columns == ["grp"]
        assert report.too_unique == ["id"]
        events = [e for e in logs if e["event"] == "freqs_df_too_unique"]
        assert len(events) == 1
        assert events[0]["columns"] == ["id"]
        assert "'id'" in events[0]["message"]

    def test_customers_selection(self, customers):
        columns, report = scan_columns(customers, top=2)
        assert columns == ["gender", "segment"]
        assert sorted(report.too_unique) == ["customer_id", "revenue"]
        assert report.no_variance == ["source"]
        assert report.over_top == ["country", "channel"]

    def test_list_column_ignored(self, customers):
        columns, report = scan_columns(customers)
        assert "tags" not in columns
        assert "tags" not in report.excluded

    def test_keep_constant_columns(self, customers):
        columns, report = scan_columns(customers, novar=False)
        assert columns[0] == "source"
        assert report.no_variance == []

    def test_ordered_by_fewest_distinct_values(self, customers):
        columns, _ = scan_columns(customers)
        assert columns == ["gender", "segment", "country", "channel"]

    def test_quiet(self, ids_and_group):
        with capture_logs() as logs:
            scan_columns(ids_and_group, quiet=True)
        assert logs == []

    def test_empty_frame(self):
        columns, report = scan_columns(pd.DataFrame({"a": []}))
        assert columns == []
        assert report.excluded == []

    def test_vector_rejected(self):
        with pytest.raises(TypeError, match="not a vector"):
            scan_columns(pd.Series([1, 2, 3]))


class TestExclusionReport:
    def test_reason_and_frame(self):
        report = ExclusionReport(too_unique=["id"], no_variance=["k"], over_top=["z"])
        assert report.excluded == ["id", "k", "z"]
        assert report.reason("k") == "no_variance"
        assert report.reason("other") is None
        frame = report.to_frame()
        assert frame.columns.tolist() == ["column", "reason"]
        assert frame["reason"].tolist() == ["too_unique", "no_variance", "over_top"]


class TestColumnFrequencies:
    def test_values_and_shares(self, letters):
        out = column_frequencies(letters, ["x"])
        assert out.columns.tolist() == ["variable", "value", "n", "p", "pcum"]
        assert out["value"].tolist() == ["c", "a", "b"]
        assert out["n"].tolist() == [3, 2, 1]
        assert out["p"].tolist() == pytest.approx([50.0, 33.33, 16.67])
        assert out["pcum"].tolist() == pytest.approx([50.0, 83.33, 100.0])

    def test_high_frequency_bucket(self):
        df = pd.DataFrame({"v": ["a"] * 5 + ["b"] * 2 + ["c"] * 2 + ["d"]})
        out = column_frequencies(df, ["v"], min_ratio=0.25)
        assert out["value"].tolist() == ["a", HF_LABEL]
        assert out["n"].tolist() == [5, 5]
        assert out["p"].tolist() == pytest.approx([50.0, 50.0])
        assert out["pcum"].tolist() == pytest.approx([50.0, 100.0])

    def test_column_priority_and_pcum_per_variable(self, customers):
        out = column_frequencies(customers, ["gender", "segment"])
        assert out["variable"].tolist() == ["gender", "gender", "segment", "segment", "segment"]
        assert out["value"].iloc[2] == "retail"
        for _, g in out.groupby("variable"):
            assert g["pcum"].iloc[-1] == pytest.approx(100, abs=0.1)

    def test_missing_value_kept(self, customers):
        out = column_frequencies(customers, ["country"])
        assert out["value"].isna().sum() == 1
        assert out["n"].sum() == len(customers)

    def test_non_text_values_as_text(self):
        df = pd.DataFrame({"k": [1, 1, 2]})
        out = column_frequencies(df, ["k"])
        assert out["value"].tolist() == ["1", "2"]


class TestFreqsDf:
    def test_table(self, customers):
        out = freqs_df(customers, plot=False)
        assert set(out["variable"]) == {"gender", "segment", "country", "channel"}
        report = out.attrs["exclusions"]
        assert isinstance(report, ExclusionReport)
        assert "source" in report.no_variance

    def test_everything_excluded(self, ids_and_group):
        df = ids_and_group[["id"]]
        with capture_logs() as logs:
            assert freqs_df(df, plot=False) is None
        warnings = [e for e in logs if e["event"] == "freqs_df_empty"]
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["message"] == NO_INFO_MESSAGE

    def test_composition_chart(self, customers):
        chart = freqs_df(customers, plot=True)
        assert chart.kind == "composition"
        assert chart.title == "Global Values Frequencies"
        assert chart.exclusions.no_variance == ["source"]
        assert len(chart.figure.axes) == 1
        ax = chart.figure.axes[0]
        ticks = {round(t.get_position()[1]): t.get_text() for t in ax.get_yticklabels()}
        assert ticks == {3: "gender", 2: "segment", 1: "country", 0: "channel"}

    def test_missing_segment_faint(self, customers):
        chart = freqs_df(customers, plot=True)
        na_rows = chart.data[chart.data["value"] == "NA"]
        assert len(na_rows) == 1
        assert na_rows["alpha"].iloc[0] == pytest.approx(0.1)

    def test_save(self, customers, plots_dir):
        chart = freqs_df(customers, plot=False, save=True, subdir="eda")
        assert chart.path == plots_dir / "eda" / "viz_freqs_df.png"
        assert chart.path.exists()
