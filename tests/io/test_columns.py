import unittest

from pysp3.io.columns import Sp3FormatError, field, to_float, to_int, to_str


class TestColumnDecoder(unittest.TestCase):

    def setUp(self):
        self.line = "PG01  -6356.271658 -24964.591339  -6958.453279    -11.622457\n"

    def test_float_fields(self):
        self.assertAlmostEqual(to_float(self.line, 4, 14), -6356.271658)
        self.assertAlmostEqual(to_float(self.line, 18, 14), -24964.591339)
        self.assertAlmostEqual(to_float(self.line, 32, 14), -6958.453279)
        self.assertAlmostEqual(to_float(self.line, 46, 14), -11.622457)

    def test_fortran_exponent(self):
        self.assertEqual(to_float("  1.5D+02", 0, 9), 150.0)
        self.assertEqual(to_float("  1.5d-01", 0, 9), 0.15)

    def test_int_fields(self):
        line = "*  2020  1  2  3  4  5.00000000"
        self.assertEqual(to_int(line, 3, 4), 2020)
        self.assertEqual(to_int(line, 8, 2), 1)
        self.assertEqual(to_int(line, 11, 2), 2)

    def test_blank_int_is_zero(self):
        self.assertEqual(to_int("+        G06", 3, 3), 0)

    def test_str_field(self):
        self.assertEqual(to_str(self.line, 1, 3), "G01")
        # short lines give short strings
        self.assertEqual(to_str("%c G", 9, 3), "")

    def test_truncated_field_raises(self):
        with self.assertRaises(Sp3FormatError):
            to_float("PG01  -6356.27", 4, 14)
        with self.assertRaises(Sp3FormatError):
            field("*  2020", 8, 2)

    def test_newline_not_part_of_field(self):
        with self.assertRaises(Sp3FormatError):
            field("abc\n", 0, 4)

    def test_invalid_number_raises(self):
        with self.assertRaises(Sp3FormatError) as context:
            to_float("    12.3x56", 0, 11)
        self.assertIn("12.3x56", str(context.exception))
        with self.assertRaises(Sp3FormatError):
            to_int(" a1", 0, 3)
        with self.assertRaises(Sp3FormatError):
            to_float("           ", 0, 11)

    def test_format_error_is_value_error_with_location(self):
        error = Sp3FormatError("invalid number", filename="orbit.sp3", line_number=12)
        self.assertIsInstance(error, ValueError)
        self.assertEqual(str(error), "orbit.sp3:12: invalid number")
        self.assertEqual(error.line_number, 12)


if __name__ == '__main__':
    unittest.main()
