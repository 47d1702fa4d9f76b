"""Tests for src/eda/layout.py -- key roles, bar labels, subtitles."""
import pandas as pd
import pytest

from src.eda.layout import (
    DEFAULT_TITLE,
    build_plot_spec,
    check_plot_keys,
    default_subtitle,
    label_placement,
    needs_multi_view,
)
from src.frequencies.grouping import count_groups
from src.frequencies.ranking import rank_frequencies
from src.frequencies.truncation import truncate_top


def _ranked(df, keys):
    return rank_frequencies(count_groups(df, keys), keys)


class TestLabelPlacement:
    def test_short_bar_outside(self):
        data = pd.DataFrame({"n": [100, 50, 10], "p": [62.5, 31.25, 6.25]})
        out = label_placement(data)
        assert out["label_outside"].tolist() == [False, False, True]
        assert out["label_hjust"].tolist() == [1.05, 1.05, -0.1]
        assert out["label_colour"].tolist() == ["m", "m", "f"]
        assert out["label"].iloc[0] == "100 (62.5%)"

    def test_outside_label_never_on_dark(self):
        data = pd.DataFrame({"n": [100, 80, 70], "p": [40.0, 32.0, 28.0]})
        out = label_placement(data)
        assert out["label_outside"].tolist() == [False, True, True]
        assert out["label_colour"].tolist() == ["m", "f", "f"]

    def test_equal_bars_all_inside(self):
        data = pd.DataFrame({"n": [5, 5], "p": [50.0, 50.0]})
        out = label_placement(data)
        assert not out["label_outside"].any()

    def test_label_text(self):
        data = pd.DataFrame({"n": [1234, 2], "p": [33.3333, 50.0]})
        assert label_placement(data)["label"].tolist() == ["1,234 (33.33%)", "2 (50%)"]


class TestKeys:
    def test_too_many_keys(self):
        with pytest.raises(ValueError, match="too complex to visualize"):
            check_plot_keys(["a", "b", "c", "d"])

    def test_no_keys(self):
        with pytest.raises(ValueError):
            check_plot_keys([])

    def test_multi_view_when_many_columns(self, three_keys):
        assert needs_multi_view(three_keys, ["a", "b", "c"])
        assert not needs_multi_view(three_keys, ["c", "a", "b"])
        assert not needs_multi_view(three_keys, ["a", "c"])


class TestSubtitle:
    def test_one_key(self):
        assert default_subtitle(["country"]) == "Variable: country"

    def test_note_weight_and_name(self):
        text = default_subtitle(["country"], note="[2 out of 5 most frequent]", weight="revenue", variable_name="Country")
        assert text == "Variable: Country [2 out of 5 most frequent] (weighted by revenue)"

    def test_two_keys(self):
        assert default_subtitle(["a", "b"]) == "Variables: a grouped by b"
        assert default_subtitle(["a", "b"], weight="w") == "Variables: a grouped by b\n(weighted by w)"

    def test_three_keys(self):
        assert default_subtitle(["a", "b", "c"]) == "Variables: a grouped by b [rows] and c [columns]"


class TestBuildPlotSpec:
    def test_single(self, letters):
        spec = build_plot_spec(_ranked(letters, ["x"]), ["x"])
        assert spec.kind == "single"
        assert spec.bar_key == "x"
        assert spec.row_key is None
        assert spec.title == DEFAULT_TITLE
        assert spec.caption == "Total Obs.: 6"
        assert spec.x_max == pytest.approx(3.09)
        assert {"label", "label_hjust", "label_outside", "label_colour"} <= set(spec.data.columns)

    def test_truncation_texts(self, letters):
        tr = truncate_top(_ranked(letters, ["x"]), top=2)
        spec = build_plot_spec(tr.kept, ["x"], truncation=tr)
        assert spec.caption == "Obs.: 5 (out of 6)"
        assert "[2 out of 3 most frequent]" in spec.subtitle

    def test_roles(self, three_keys):
        spec = build_plot_spec(_ranked(three_keys, ["c", "a", "b"]), ["c", "a", "b"])
        assert spec.kind == "facet_grid"
        assert (spec.bar_key, spec.row_key, spec.col_key) == ("c", "a", "b")

    def test_missing_key_shown_as_na(self, customers):
        spec = build_plot_spec(_ranked(customers, ["country"]), ["country"])
        assert "NA" in spec.data["country"].tolist()

    def test_custom_texts(self, letters):
        spec = build_plot_spec(_ranked(letters, ["x"]), ["x"], title="T", subtitle="S")
        assert (spec.title, spec.subtitle) == ("T", "S")

    def test_empty_table(self, letters):
        empty = _ranked(letters, ["x"]).iloc[0:0]
        with pytest.raises(ValueError, match="Nothing to plot"):
            build_plot_spec(empty, ["x"])
