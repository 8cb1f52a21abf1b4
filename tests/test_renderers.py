import unittest

import yaml

from header_fixtures import ESP32S3_CORE_ISA
from xtensa_config.common.chips import Chip
from xtensa_config.common.types import HeaderSourceError
from xtensa_config.header_sources import MappingHeaderSource
from xtensa_config.pipeline import ChipResult, process_chip
from xtensa_config.renderers import render


class RenderTest(unittest.TestCase):

    def setUp(self):
        text = ESP32S3_CORE_ISA + "#define XCHAL_BROKEN ???\n"
        source = MappingHeaderSource({Chip.ESP32S3: text})
        with self.assertLogs(level="WARNING"):
            self.result = process_chip(Chip.ESP32S3, source)

    def test_text(self):
        lines = render(self.result, "text").splitlines()

        self.assertEqual("ESP32S3 (xtensa_esp32s3)", lines[0])
        self.assertIn("    XCHAL_ICACHE_SIZE: Integer(16384)", lines)
        self.assertIn("    XCHAL_CORE_ID: String('LX7_ESP32_S3_MP')", lines)
        self.assertIn("    XCHAL_INT6_TYPE: Interrupt(TIMER)", lines)
        self.assertIn("1 definition(s) skipped:", lines)
        self.assertTrue(any("XCHAL_BROKEN = ???" in line for line in lines))

    def test_yaml(self):
        document = yaml.safe_load(render(self.result, "yaml"))
        self.assertEqual("ESP32S3", document["chip"])
        self.assertEqual("xtensa_esp32s3", document["overlay"])
        self.assertEqual(256, document["config"]["XCHAL_LOOP_BUFFER_SIZE"])
        self.assertEqual("XTHAL_INTTYPE_TIMER",
                         document["config"]["XCHAL_TIMER0_INTERRUPT"])
        self.assertNotIn("XCHAL_BROKEN", document["config"])

    def test_python_module(self):
        document = render(self.result, "python")
        lines = document.splitlines()

        self.assertIn("from xtensa_config.common.types import InterruptType",
                      lines)
        self.assertIn('CHIP = "ESP32S3"', lines)
        self.assertIn("XCHAL_NUM_AREGS = 64", lines)
        self.assertIn("XCHAL_CORE_ID = 'LX7_ESP32_S3_MP'", lines)
        self.assertIn("XCHAL_INT6_TYPE = InterruptType.TIMER", lines)

        namespace = {}
        exec(compile(document, "core_isa.py", "exec"), namespace)
        self.assertEqual(0x4000, namespace["XCHAL_ICACHE_SIZE"])

    def test_python_module_without_interrupts(self):
        source = MappingHeaderSource({Chip.ESP8266: "#define FOO 1\n"})
        document = render(process_chip(Chip.ESP8266, source), "python")
        self.assertNotIn("import", document)
        self.assertIn("FOO = 1", document.splitlines())

    def test_rejects_failed_chip(self):
        result = ChipResult(chip=Chip.ESP32,
                            error=HeaderSourceError("missing"))
        with self.assertRaises(ValueError):
            render(result, "text")

    def test_rejects_unknown_format(self):
        with self.assertRaises(ValueError):
            render(self.result, "json")


if __name__ == "__main__":
    unittest.main()
