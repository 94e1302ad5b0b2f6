from __future__ import annotations

import unittest
from datetime import date

from graph_widget.models import Period, Record
from graph_widget.plugin import SEED_DATA
from graph_widget.window import DataWindowService, ReferenceMode, cutoff


def _seed_records() -> tuple[Record, ...]:
    return tuple(Record.from_dict(item) for item in SEED_DATA)


def _service_at(today: date, **kwargs) -> DataWindowService:
    return DataWindowService(_seed_records(), today=lambda: today, **kwargs)


class CutoffTests(unittest.TestCase):
    def test_day_windows(self) -> None:
        self.assertEqual(cutoff(Period.LAST_7_DAYS, date(2023, 6, 19)), date(2023, 6, 12))
        self.assertEqual(cutoff(Period.LAST_15_DAYS, date(2023, 6, 19)), date(2023, 6, 4))

    def test_month_window_is_calendar_month(self) -> None:
        self.assertEqual(cutoff(Period.LAST_1_MONTH, date(2023, 8, 23)), date(2023, 7, 23))
        self.assertEqual(cutoff(Period.LAST_1_MONTH, date(2024, 1, 15)), date(2023, 12, 15))

    def test_month_window_clamps_to_month_end(self) -> None:
        self.assertEqual(cutoff(Period.LAST_1_MONTH, date(2024, 3, 31)), date(2024, 2, 29))
        self.assertEqual(cutoff(Period.LAST_1_MONTH, date(2023, 3, 31)), date(2023, 2, 28))
        self.assertEqual(cutoff(Period.LAST_1_MONTH, date(2023, 5, 31)), date(2023, 4, 30))


class DataWindowServiceTests(unittest.TestCase):
    def test_cutoff_day_is_included(self) -> None:
        window = _service_at(date(2023, 6, 19)).get_window(Period.LAST_7_DAYS)
        php = Record(date=date(2023, 6, 12), name="php", students=200, fees=2000)
        self.assertIn(php, window)

    def test_day_before_cutoff_is_excluded(self) -> None:
        window = _service_at(date(2023, 6, 20)).get_window(Period.LAST_7_DAYS)
        php = Record(date=date(2023, 6, 12), name="php", students=200, fees=2000)
        self.assertNotIn(php, window)
        self.assertEqual(len(window), len(SEED_DATA) - 1)

    def test_window_is_ordered_subset_of_seed(self) -> None:
        records = _seed_records()
        for today in (date(2023, 6, 20), date(2023, 7, 1), date(2023, 8, 15), date(2023, 8, 30)):
            service = _service_at(today)
            for period in Period:
                window = service.get_window(period)
                start = cutoff(period, today)
                expected = [r for r in records if r.date >= start]
                self.assertEqual(window, expected)
                self.assertTrue(all(r.date >= start for r in window))

    def test_seed_order_is_kept_when_dates_are_unsorted(self) -> None:
        window = _service_at(date(2023, 8, 23)).get_window(Period.LAST_7_DAYS)
        self.assertEqual([r.name for r in window], ["scala", "go", "java"])

    def test_repeated_calls_are_identical(self) -> None:
        service = _service_at(date(2023, 8, 23))
        self.assertEqual(service.get_window(Period.LAST_15_DAYS), service.get_window(Period.LAST_15_DAYS))

    def test_empty_window(self) -> None:
        window = _service_at(date(2024, 1, 1)).get_window(Period.LAST_1_MONTH)
        self.assertEqual(window, [])

    def test_latest_reference_uses_newest_record(self) -> None:
        service = _service_at(date(2030, 1, 1), reference=ReferenceMode.LATEST)
        self.assertEqual(service.reference_date(), date(2023, 8, 23))

        fifteen = service.get_window(Period.LAST_15_DAYS)
        self.assertEqual(len(fifteen), 12)
        self.assertNotIn("javascript", [r.name for r in fifteen])

        month = service.get_window(Period.LAST_1_MONTH)
        self.assertEqual(len(month), 15)
        self.assertTrue(all(r.date.month == 8 for r in month))

    def test_latest_reference_without_records_falls_back_to_today(self) -> None:
        service = DataWindowService([], reference=ReferenceMode.LATEST, today=lambda: date(2023, 6, 1))
        self.assertEqual(service.reference_date(), date(2023, 6, 1))
        self.assertEqual(service.get_window(Period.LAST_7_DAYS), [])

    def test_explicit_reference_overrides_clock(self) -> None:
        service = _service_at(date(2030, 1, 1))
        window = service.get_window(Period.LAST_7_DAYS, reference=date(2023, 6, 19))
        self.assertEqual(window[0].name, "php")

    def test_rejects_raw_period_value(self) -> None:
        with self.assertRaises(TypeError):
            _service_at(date(2023, 6, 19)).get_window("7days")


class PeriodTests(unittest.TestCase):
    def test_parse_known_values(self) -> None:
        self.assertIs(Period.parse("7days"), Period.LAST_7_DAYS)
        self.assertIs(Period.parse(" 15DAYS "), Period.LAST_15_DAYS)
        self.assertIs(Period.parse(Period.LAST_1_MONTH), Period.LAST_1_MONTH)

    def test_parse_unknown_value_fails(self) -> None:
        for value in ("30days", "", None, 7):
            with self.assertRaises(ValueError):
                Period.parse(value)

    def test_labels(self) -> None:
        self.assertEqual(Period.LAST_1_MONTH.label, "Last 1 month")


class RecordTests(unittest.TestCase):
    def test_from_dict(self) -> None:
        record = Record.from_dict({"date": "2023-06-12", "name": "php", "students": 200, "fees": 2000})
        self.assertEqual(record.date, date(2023, 6, 12))
        self.assertEqual(record.to_dict()["date"], "2023-06-12")

    def test_from_dict_rejects_malformed_items(self) -> None:
        bad_items = [
            {"name": "php", "students": 1, "fees": 1},
            {"date": "12.06.2023", "name": "php", "students": 1, "fees": 1},
            {"date": None, "name": "php", "students": 1, "fees": 1},
            {"date": "2023-06-12", "name": 5, "students": 1, "fees": 1},
            {"date": "2023-06-12", "name": "php", "students": -1, "fees": 1},
            {"date": "2023-06-12", "name": "php", "students": 1, "fees": "10"},
            {"date": "2023-06-12", "name": "php", "students": True, "fees": 1},
            ["2023-06-12", "php", 1, 1],
        ]
        for item in bad_items:
            with self.assertRaises(ValueError):
                Record.from_dict(item)


if __name__ == "__main__":
    unittest.main()
