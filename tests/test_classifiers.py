import unittest

from xtensa_config.classifiers import classify
from xtensa_config.common.constants import INT64_MAX
from xtensa_config.common.types import (IdentifierRef, IntegerValue,
                                        InterruptType, InterruptValue,
                                        TextValue, Unrecognized)


class ClassifyTest(unittest.TestCase):

    def test_decimal(self):
        for text in ["0", "7", "10", "0010", "65536", str(INT64_MAX)]:
            with self.subTest(text=text):
                self.assertEqual(IntegerValue(int(text, 10)), classify(text))

    def test_hexadecimal(self):
        cases = [
            ("0x0", 0),
            ("0x1F", 31),
            ("0X1f", 31),
            ("0x40000000", 0x40000000),
            ("0xdeadBEEF", 0xDEADBEEF),
            ("0x7FFFFFFFFFFFFFFF", INT64_MAX),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                self.assertEqual(IntegerValue(expected), classify(text))

    def test_integer_overflow_is_reported(self):
        for text in [str(INT64_MAX + 1),
                     "99999999999999999999999",
                     "0x8000000000000000",
                     "0xFFFFFFFFFFFFFFFF"]:
            with self.subTest(text=text):
                self.assertEqual(Unrecognized(text, "integer overflow"),
                                 classify(text))

    def test_interrupt_tokens(self):
        for kind in InterruptType:
            with self.subTest(kind=kind):
                self.assertEqual(InterruptValue(kind), classify(kind.value))

        kinds = {classify(kind.value) for kind in InterruptType}
        self.assertEqual(7, len(kinds))

    def test_near_interrupt_tokens_are_identifiers(self):
        for text in ["xthal_inttype_nmi",
                     "XTHAL_INTTYPE_NMI_",
                     "XTHAL_INTTYPE",
                     "XTHAL_TIMER_UNCONFIGURED2"]:
            with self.subTest(text=text):
                self.assertEqual(IdentifierRef(text), classify(text))

    def test_string(self):
        cases = [
            ('"abc"', "abc"),
            ('"esp32_v3_49_prod"', "esp32_v3_49_prod"),
            ('"a\\n"', "a\\n"),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                self.assertEqual(TextValue(expected), classify(text))

    def test_identifier(self):
        for text in ["FOO", "_private", "XCHAL_EXCM_LEVEL", "a1_b2"]:
            with self.subTest(text=text):
                self.assertEqual(IdentifierRef(text), classify(text))

    def test_unrecognized(self):
        for text in ["???", "-1", "1U", "0x", "0xG1", "(1)", '""', '"abc',
                     '"a"b"', "1FOO", ""]:
            with self.subTest(text=text):
                result = classify(text)
                self.assertIsInstance(result, Unrecognized)
                self.assertEqual(text, result.text)


if __name__ == "__main__":
    unittest.main()
