from __future__ import annotations

import math
import unittest

from xychart.formatting import LogFormat, NumberFormat
from xychart.ticks import TickSelector, clean_tick_value


class TickSelectorTests(unittest.TestCase):
    def test_select_rounds_reference_up_to_power_of_ten(self) -> None:
        selector = TickSelector()
        self.assertEqual(selector.select(100.0), 100.0)
        self.assertEqual(selector.state, (2, 1))
        self.assertEqual(selector.select(150.0), 1000.0)
        self.assertEqual(selector.select(1.0), 1.0)
        self.assertAlmostEqual(selector.select(0.03), 0.1)

    def test_next_then_previous_restores_state(self) -> None:
        for reference in (0.003, 1.0, 7.5, 42.0, 1e5):
            selector = TickSelector()
            selector.select(reference)
            before = (selector.state, selector.current_tick_size())
            self.assertTrue(selector.next())
            self.assertTrue(selector.previous())
            self.assertEqual((selector.state, selector.current_tick_size()), before)

    def test_next_follows_one_two_five_sequence(self) -> None:
        selector = TickSelector()
        selector.select(1.0)
        sizes = []
        for _ in range(7):
            selector.next()
            sizes.append(selector.current_tick_size())
        self.assertEqual(sizes, [2.0, 5.0, 10.0, 20.0, 50.0, 100.0, 200.0])

        back = []
        for _ in range(7):
            selector.previous()
            back.append(selector.current_tick_size())
        self.assertEqual(back, [100.0, 50.0, 20.0, 10.0, 5.0, 2.0, 1.0])

    def test_power_cap_stops_movement(self) -> None:
        selector = TickSelector(max_power=2)
        self.assertEqual(selector.select(1e5), 100.0)
        self.assertTrue(selector.next())
        self.assertTrue(selector.next())
        self.assertEqual(selector.current_tick_size(), 500.0)
        self.assertFalse(selector.next())
        self.assertEqual(selector.state, (2, 5))

        selector.select(1e-9)
        self.assertEqual(selector.state, (-2, 1))
        self.assertFalse(selector.previous())

    def test_select_rejects_non_positive_or_non_finite(self) -> None:
        selector = TickSelector()
        for bad in (0.0, -1.0, math.nan, math.inf):
            with self.assertRaises(ValueError):
                selector.select(bad)

    def test_max_power_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            TickSelector(max_power=0)

    def test_tick_format_depends_on_power(self) -> None:
        selector = TickSelector()
        selector.select(0.05)
        self.assertEqual(selector.current_tick_format().format(0.05), "0.05")
        selector.select(1e-6)
        self.assertEqual(selector.current_tick_format().format(1e-6), "1e-06")
        selector.select(2e7)
        self.assertEqual(selector.current_tick_format().format(2e7), "2.0e+07")
        selector.select(1000.0)
        self.assertEqual(selector.current_tick_format().format(1000.0), "1,000")

    def test_clean_tick_value_strips_float_noise(self) -> None:
        self.assertEqual(clean_tick_value(0.1 + 0.2), 0.3)
        self.assertEqual(clean_tick_value(0.0), 0.0)

    def test_clean_tick_value_relative_to_step(self) -> None:
        self.assertEqual(clean_tick_value(3 * 0.1, 0.1), 0.3)
        self.assertEqual(clean_tick_value(1.7e12 + 1.0, 1.0), 1.7e12 + 1.0)
        self.assertNotEqual(clean_tick_value(1.7e12 + 1.0, 1.0), clean_tick_value(1.7e12 + 2.0, 1.0))
        with self.assertRaises(ValueError):
            clean_tick_value(1.0, 0.0)


class NumberFormatTests(unittest.TestCase):
    def test_fixed_decimals_with_thousands_separator(self) -> None:
        self.assertEqual(NumberFormat(2).format(1234.5), "1,234.50")
        self.assertEqual(NumberFormat(1, separator="").format(1234.56), "1234.6")
        self.assertEqual(NumberFormat(0, separator=" ").format(1234567.0), "1 234 567")

    def test_negative_zero_is_normalized(self) -> None:
        self.assertEqual(NumberFormat(0).format(-0.2), "0")
        self.assertEqual(NumberFormat(None).format(-0.0), "0")

    def test_shortest_representation(self) -> None:
        self.assertEqual(NumberFormat(None).format(3.0), "3")
        self.assertEqual(NumberFormat(None).format(0.125), "0.125")

    def test_invalid_configuration_raises(self) -> None:
        with self.assertRaises(ValueError):
            NumberFormat(-1)
        with self.assertRaises(ValueError):
            NumberFormat(None, exponential=True)

    def test_log_format(self) -> None:
        self.assertEqual(LogFormat().format(100.0), "10^2.00")
        self.assertEqual(LogFormat(base=2.0, base_label="2", decimals=0).format(8.0), "2^3")
        with self.assertRaises(ValueError):
            LogFormat(base=1.0)


if __name__ == "__main__":
    unittest.main()
