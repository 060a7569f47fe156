from __future__ import annotations

import unittest

from cardinal.observability.telemetry import (
    counter,
    get_all_latency_stats,
    get_counters,
    get_latency_stats,
    LATENCY_WINDOW,
    get_p95,
    record_latency,
    reset_latencies,
    time_block,
)


class TelemetryTests(unittest.TestCase):
    def setUp(self):
        reset_latencies()

    def test_time_block_appends_ms_suffix(self):
        metric_name = "llm.yard_text.latency"

        with time_block(metric_name):
            pass

        stats = get_latency_stats(metric_name)
        self.assertEqual(stats["count"], 1)

        p95 = get_p95(metric_name)
        self.assertGreaterEqual(p95, 0.0)

    def test_time_block_respects_existing_suffix(self):
        metric_name = "speech.total_ms"

        with time_block(metric_name):
            pass

        stats = get_latency_stats(metric_name)
        self.assertEqual(stats["count"], 1)

    def test_time_block_records_on_error(self):
        metric_name = "llm.sales_script.latency"

        with self.assertRaises(RuntimeError):
            with time_block(metric_name):
                raise RuntimeError("boom")

        self.assertEqual(get_latency_stats(metric_name)["count"], 1)

    def test_all_latency_stats_lists_recorded_metrics(self):
        with time_block("llm.job_intel.latency"):
            pass

        self.assertIn("llm.job_intel.latency_ms", get_all_latency_stats())

    def test_samples_capped_per_metric(self):
        metric_name = "speech.synthesize.latency"

        for i in range(LATENCY_WINDOW + 25):
            record_latency(metric_name, float(i))

        stats = get_latency_stats(metric_name)
        self.assertEqual(stats["count"], LATENCY_WINDOW)
        # Oldest samples were dropped first
        self.assertEqual(stats["min"], 25.0)
        self.assertEqual(stats["max"], float(LATENCY_WINDOW + 24))

    def test_window_is_per_metric(self):
        for _i in range(LATENCY_WINDOW):
            record_latency("llm.yard_photo.latency", 0.2)
        record_latency("llm.yard_text.latency", 0.1)

        self.assertEqual(get_latency_stats("llm.yard_text.latency")["count"], 1)

    def test_empty_metric_stats_are_zero(self):
        self.assertEqual(get_latency_stats("never.recorded")["count"], 0)
        self.assertEqual(get_p95("never.recorded"), 0.0)

    def test_counter_increments(self):
        before = counter("test.counter", 0)
        counter("test.counter")
        after = counter("test.counter", 0)
        self.assertEqual(after, before + 1)
        self.assertEqual(get_counters()["test.counter"], after)


if __name__ == "__main__":
    unittest.main()
