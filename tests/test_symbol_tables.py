import unittest

from xtensa_config.common.types import (DiagnosticKind, IntegerValue,
                                        InterruptType, InterruptValue,
                                        TextValue)
from xtensa_config.symbol_tables import (SymbolTable, build,
                                         collect_definitions,
                                         parse_definition, resolve_aliases)


class BuildTest(unittest.TestCase):

    def test_end_to_end(self):
        table, diagnostics = build([
            "#define FOO 10",
            "#define BAR 0x1F",
            "#define BAZ FOO",
            "#define QUX XTHAL_INTTYPE_NMI",
            "#define BAD ???",
        ])

        self.assertEqual({
            "FOO": IntegerValue(10),
            "BAR": IntegerValue(31),
            "BAZ": IntegerValue(10),
            "QUX": InterruptValue(InterruptType.NMI),
        }, dict(table))

        self.assertEqual(1, len(diagnostics))
        diagnostic = diagnostics.entries[0]
        self.assertIs(DiagnosticKind.UNRECOGNIZED_VALUE, diagnostic.kind)
        self.assertEqual("BAD", diagnostic.identifier)
        self.assertEqual("???", diagnostic.text)
        self.assertEqual(5, diagnostic.line_number)

    def test_last_define_wins(self):
        table, diagnostics = build(["#define X 1", "#define X 2"])
        self.assertEqual({"X": IntegerValue(2)}, dict(table))
        self.assertEqual(0, len(diagnostics))

    def test_later_alias_supersedes_earlier_literal(self):
        table, _ = build(["#define X 1", "#define Y 7", "#define X Y"])
        self.assertEqual(IntegerValue(7), table["X"])

    def test_later_literal_supersedes_earlier_alias(self):
        table, diagnostics = build(
            ["#define Y 7", "#define X Y", "#define X 1"])
        self.assertEqual(IntegerValue(1), table["X"])
        self.assertEqual(0, len(diagnostics))

    def test_unrecognized_redefinition_keeps_earlier_value(self):
        table, diagnostics = build(["#define X 1", "#define X (2)"])
        self.assertEqual(IntegerValue(1), table["X"])
        self.assertEqual(
            1, diagnostics.counts()[DiagnosticKind.UNRECOGNIZED_VALUE])

    def test_unresolved_redefinition_keeps_earlier_value(self):
        table, diagnostics = build(["#define X 1", "#define X MISSING"])
        self.assertEqual({"X": IntegerValue(1)}, dict(table))
        self.assertEqual([("X", "MISSING", 2)],
                         [(d.identifier, d.target, d.line_number)
                          for d in diagnostics])

    def test_unresolved_redefinition_keeps_earlier_alias(self):
        table, diagnostics = build([
            "#define Y 7",
            "#define X Y",
            "#define X MISSING",
            "#define Z 1",
            "#define Z A",
            "#define Z B",
        ])
        self.assertEqual(IntegerValue(7), table["X"])
        self.assertEqual(IntegerValue(1), table["Z"])
        self.assertEqual([3, 6], [d.line_number for d in diagnostics])

    def test_forward_reference_resolves(self):
        table, diagnostics = build([
            "#define XCHAL_NMILEVEL XCHAL_EXCM_LEVEL",
            "#define XCHAL_EXCM_LEVEL 3",
        ])
        self.assertEqual(IntegerValue(3), table["XCHAL_NMILEVEL"])
        self.assertEqual(0, len(diagnostics))

    def test_alias_of_string_and_interrupt(self):
        table, _ = build([
            '#define CORE_ID "esp32"',
            "#define INT_TYPE XTHAL_INTTYPE_TIMER",
            "#define ID CORE_ID",
            "#define TIMER_TYPE INT_TYPE",
        ])
        self.assertEqual(TextValue("esp32"), table["ID"])
        self.assertEqual(InterruptValue(InterruptType.TIMER),
                         table["TIMER_TYPE"])

    def test_two_hop_alias_chain_is_not_resolved(self):
        for lines in [
                ["#define A B", "#define B C", "#define C 5"],
                ["#define C 5", "#define B C", "#define A B"]]:
            with self.subTest(lines=lines):
                table, diagnostics = build(lines)

                self.assertNotIn("A", table)
                self.assertEqual(IntegerValue(5), table["B"])
                self.assertEqual(IntegerValue(5), table["C"])

                self.assertEqual(1, len(diagnostics))
                diagnostic = diagnostics.entries[0]
                self.assertIs(DiagnosticKind.UNRESOLVED_ALIAS,
                              diagnostic.kind)
                self.assertEqual("A", diagnostic.identifier)
                self.assertEqual("B", diagnostic.target)

    def test_undefined_alias_target_is_dropped(self):
        table, diagnostics = build(["#define A MISSING"])
        self.assertNotIn("A", table)
        self.assertEqual([("A", "MISSING")],
                         [(d.identifier, d.target) for d in diagnostics])

    def test_self_alias_is_dropped(self):
        table, diagnostics = build(["#define A A"])
        self.assertEqual(0, len(table))
        self.assertEqual(
            1, diagnostics.counts()[DiagnosticKind.UNRESOLVED_ALIAS])

    def test_resolve_aliases_is_idempotent(self):
        direct, pending, _ = collect_definitions([
            "#define A B",
            "#define B C",
            "#define C 5",
            "#define D C",
        ])

        first_table, first_diagnostics = resolve_aliases(direct, pending)
        second_table, second_diagnostics = resolve_aliases(direct, pending)

        self.assertEqual(dict(first_table), dict(second_table))
        self.assertEqual(list(first_diagnostics), list(second_diagnostics))
        self.assertEqual({"C": IntegerValue(5)}, direct)

    def test_unmatched_lines_are_reported_in_order(self):
        table, diagnostics = build([
            "#define _XTENSA_CORE_CONFIGURATION_H",
            "#define FOO 1",
            "#define MAX(a, b) ((a) > (b) ? (a) : (b))",
            "#define  BAR\t2 /* trailing comment */",
        ])

        self.assertEqual({"FOO": IntegerValue(1), "BAR": IntegerValue(2)},
                         dict(table))
        self.assertEqual([
            (DiagnosticKind.UNMATCHED_LINE, 1),
            (DiagnosticKind.UNMATCHED_LINE, 3),
        ], [(d.kind, d.line_number) for d in diagnostics])

    def test_diagnostics_of_both_passes(self):
        _, diagnostics = build([
            "#define A MISSING",
            "#define B ???",
            "#define C",
        ])
        self.assertEqual([
            (DiagnosticKind.UNRESOLVED_ALIAS, 1),
            (DiagnosticKind.UNRECOGNIZED_VALUE, 2),
            (DiagnosticKind.UNMATCHED_LINE, 3),
        ], [(d.kind, d.line_number) for d in diagnostics])
        self.assertIn("A = MISSING", str(diagnostics.entries[0]))

    def test_alias_diagnostic_precedes_later_literal_diagnostic(self):
        _, diagnostics = build(["#define A MISSING", "#define B ???"])
        self.assertEqual([1, 2], [d.line_number for d in diagnostics])

    def test_header_line_numbers(self):
        _, diagnostics = build(
            ["#define A 1", "#define B MISSING", "#define C ???"],
            [12, 37, 40])
        self.assertEqual([("B", 37), ("C", 40)],
                         [(d.identifier, d.line_number) for d in diagnostics])
        self.assertIn("line 37", str(diagnostics.entries[0]))

    def test_diagnostics_without(self):
        _, diagnostics = build(["#define A ???", "#define B ???"])
        remaining = diagnostics.without(["A"])
        self.assertEqual(["B"], [d.identifier for d in remaining])
        self.assertEqual(2, len(diagnostics))


class ParseDefinitionTest(unittest.TestCase):

    def test_match(self):
        cases = [
            ("#define FOO 10", ("FOO", "10")),
            ("#define\tFOO\t\t0x10\t/* comment */", ("FOO", "0x10")),
            ('#define FOO "bar" baz', ("FOO", '"bar"')),
        ]
        for line, expected in cases:
            with self.subTest(line=line):
                definition = parse_definition(line, 1)
                self.assertEqual(
                    expected, (definition.identifier, definition.value_text))

    def test_mismatch(self):
        for line in ["#define FOO",
                     "#define FOO(x) x",
                     "#define 1FOO 2",
                     "#defineFOO 2",
                     "  #define FOO 2"]:
            with self.subTest(line=line):
                self.assertIsNone(parse_definition(line, 1))


class SymbolTableTest(unittest.TestCase):

    def test_accessors(self):
        table = SymbolTable({
            "FOO": IntegerValue(3),
            "BAR": TextValue("bar"),
            "BAZ": InterruptValue(InterruptType.SOFTWARE),
        })

        self.assertEqual(3, table.integer("FOO"))
        with self.assertRaises(KeyError):
            table.integer("MISSING")
        with self.assertRaises(TypeError):
            table.integer("BAR")

        self.assertEqual({
            "BAR": "bar",
            "BAZ": "XTHAL_INTTYPE_SOFTWARE",
            "FOO": 3,
        }, table.plain())
        self.assertEqual(["BAR", "BAZ", "FOO"], list(table.plain()))

    def test_integer_value_range(self):
        with self.assertRaises(ValueError):
            IntegerValue(1 << 63)


if __name__ == "__main__":
    unittest.main()
