import unittest

from header_fixtures import TempDirTestCase
from xtensa_config.common.chips import Chip
from xtensa_config.common.types import HeaderSourceError
from xtensa_config.header_sources import (MappingHeaderSource,
                                          OverlayHeaderSource,
                                          find_all_defines,
                                          number_all_defines)


class FindAllDefinesTest(unittest.TestCase):

    def test_keeps_only_define_lines(self):
        lines = [
            "#ifndef GUARD",
            "#define GUARD",
            "/* #define COMMENTED 1 */",
            "  #define INDENTED 1",
            "#define FOO 1",
            "\t\tFOO)",
        ]
        self.assertEqual(["#define GUARD", "#define FOO 1"],
                         find_all_defines(lines))
        self.assertEqual([(2, "#define GUARD"), (5, "#define FOO 1")],
                         number_all_defines(lines))


class OverlayHeaderSourceTest(TempDirTestCase):

    def test_get_lines(self):
        root = self.write_overlays(
            {Chip.ESP32S3: "#if 1\n#define FOO 1\n#endif\n"})
        source = OverlayHeaderSource(root)

        path = source.core_isa_path(Chip.ESP32S3)
        self.assertEqual("core-isa.h", path.name)
        self.assertIn("xtensa_esp32s3", path.parts)

        self.assertEqual(["#define FOO 1"], source.get_lines(Chip.ESP32S3))

    def test_esp32_reads_esp108_overlay(self):
        root = self.write_overlays({Chip.ESP32: "#define FOO 1\n"})
        source = OverlayHeaderSource(root)
        self.assertIn("xtensa_esp108", source.core_isa_path(Chip.ESP32).parts)

    def test_custom_header_path(self):
        header = self.tmp_path / "xtensa_lx106" / "core-isa.h"
        header.parent.mkdir()
        header.write_text("#define FOO 1\n")
        source = OverlayHeaderSource(self.tmp_path, "core-isa.h")
        self.assertEqual(["#define FOO 1"], source.get_lines(Chip.ESP8266))

    def test_missing_header(self):
        source = OverlayHeaderSource(self.tmp_path)
        with self.assertRaisesRegex(HeaderSourceError, "ESP8266"):
            source.get_lines(Chip.ESP8266)


class MappingHeaderSourceTest(unittest.TestCase):

    def test_get_lines(self):
        source = MappingHeaderSource(
            {Chip.ESP32S2: "#define A 1\r\n#undef A\n"})
        self.assertEqual(["#define A 1"], source.get_lines(Chip.ESP32S2))
        self.assertEqual([(1, "#define A 1")],
                         source.get_numbered_lines(Chip.ESP32S2))
        with self.assertRaises(HeaderSourceError):
            source.get_lines(Chip.ESP32)


if __name__ == "__main__":
    unittest.main()
