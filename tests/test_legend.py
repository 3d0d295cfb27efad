from __future__ import annotations

import unittest

from chartgrid import Chart
from chartgrid.legend import (
    assemble_legend,
    cluster_label_names,
    cluster_label_style,
    collect_legend_entries,
    legend_box,
)
from chartgrid.scales import DEFAULT_MARGINS
from chartgrid.series import ClusterSeries, Point
from chartgrid.styles import DEFAULT_PALETTE, NAMED_COLORS


class LegendTests(unittest.TestCase):
    def test_cluster_rows_restart_per_call(self) -> None:
        chart = Chart("scatter")
        chart.add_clusters([0, 1, 2], [0, 1, 2], [-1, 0, 1])
        chart.add_clusters([3, 4, 5], [3, 4, 5], [-1, 0, 1])
        entries = chart.legend_entries()
        self.assertEqual(
            [e.name for e in entries],
            ["Outliers", "Cluster 1", "Cluster 2", "Outliers", "Cluster 1", "Cluster 2"],
        )
        self.assertEqual([e.symbol for e in entries[:3]], ["cross", "circle", "circle"])

    def test_rows_follow_priority_order(self) -> None:
        chart = Chart("scatter")
        chart.add_clusters([0.0, 1.0], [0.0, 1.0], [0, 0])
        chart.add_horizontal_line(1.0)
        chart.add_scatter("A", [0.0, 1.0], [0.0, 1.0])
        names = [e.name for e in chart.legend_entries()]
        self.assertEqual(names, ["A", "Y = 1", "Cluster 1"])

    def test_line_chart_series_use_line_symbol(self) -> None:
        chart = Chart("line").add_line("L", [0, 1], [0, 1])
        chart.add_vertical_line(0.5)
        symbols = [e.symbol for e in chart.legend_entries()]
        self.assertEqual(symbols, ["line", "dashed-line"])

    def test_scatter_series_use_marker_symbol(self) -> None:
        chart = Chart("scatter").add_scatter("S", [0, 1], [0, 1]).set_marker_type("triangle")
        self.assertEqual(chart.legend_entries()[0].symbol, "triangle")

    def test_lone_placeholder_series_is_skipped(self) -> None:
        chart = Chart("scatter").add_point(1.0, 2.0)
        self.assertEqual(chart.legend_entries(), [])
        chart.add_scatter("B", [0], [0])
        self.assertEqual([e.name for e in chart.legend_entries()], ["Default", "B"])

    def test_duplicate_series_names_keep_first(self) -> None:
        chart = Chart("scatter")
        chart.add_scatter("A", [0], [0], color="red")
        chart.add_scatter("A", [1], [1], color="green")
        entries = chart.legend_entries()
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].style.rgb, NAMED_COLORS["red"])

    def test_same_name_in_different_groups_keeps_both_rows(self) -> None:
        chart = Chart("scatter")
        chart.add_scatter("Y = 2", [0.0, 1.0], [0.0, 3.0])
        chart.add_horizontal_line(2.0)
        chart.add_scatter("B", [0.0], [1.0])
        entries = chart.legend_entries()
        self.assertEqual([e.name for e in entries], ["Y = 2", "B", "Y = 2"])
        self.assertEqual([e.symbol for e in entries], ["circle", "circle", "dashed-line"])

    def test_hidden_items_are_flagged_and_dropped(self) -> None:
        chart = Chart("scatter")
        chart.add_scatter("A", [0], [0]).add_scatter("B", [1], [1])
        chart.hide_legend_item("A")
        self.assertEqual([e.name for e in chart.legend_entries()], ["B"])
        flagged = collect_legend_entries(chart)
        self.assertEqual([(e.name, e.visible) for e in flagged], [("A", False), ("B", True)])
        chart.show_legend_item("A")
        self.assertEqual(len(assemble_legend(chart)), 2)

    def test_discrete_categories_with_counts_listed(self) -> None:
        chart = Chart("histogram").add_discrete_histogram([0, 3, 1], ["a", "b", "c"])
        entries = chart.legend_entries()
        self.assertEqual([e.name for e in entries], ["b", "c"])
        self.assertTrue(all(e.symbol == "bar" for e in entries))

    def test_continuous_histograms_not_listed(self) -> None:
        chart = Chart("histogram").add_histogram("H", [1.0, 2.0, 3.0])
        self.assertEqual(chart.legend_entries(), [])

    def test_cluster_overrides(self) -> None:
        cluster = ClusterSeries(
            name="c",
            points=[Point(0, 0), Point(1, 1)],
            labels=[0, 3],
            names={3: "Big"},
            colors={0: "green"},
            auto_names=False,
            auto_colors=False,
        )
        self.assertEqual(cluster_label_names(cluster), {0: "Cluster 1", 3: "Big"})
        self.assertEqual(cluster_label_style(cluster, 0, DEFAULT_PALETTE).rgb, NAMED_COLORS["green"])
        self.assertEqual(cluster_label_style(cluster, 3, DEFAULT_PALETTE).rgb, DEFAULT_PALETTE.cluster_color(3))

    def test_outlier_style_is_red(self) -> None:
        cluster = ClusterSeries(name="c", points=[Point(0, 0)], labels=[-1], alpha=0.5)
        style = cluster_label_style(cluster, -1, DEFAULT_PALETTE)
        self.assertEqual(style.rgb, (1.0, 0.0, 0.0))
        self.assertEqual(style.alpha, 0.5)

    def test_legend_box_geometry(self) -> None:
        chart = Chart("scatter")
        chart.add_scatter("A", [0], [0]).add_scatter("B", [1], [1]).add_scatter("C", [2], [2])
        box = legend_box(chart.legend_entries(), chart.width, DEFAULT_MARGINS)
        assert box is not None
        self.assertEqual((box.x, box.y, box.width, box.height), (660.0, 80.0, 120.0, 70.0))
        self.assertEqual(box.row_y(2), 120.0)
        self.assertIsNone(legend_box([], 800, DEFAULT_MARGINS))


if __name__ == "__main__":
    unittest.main()
