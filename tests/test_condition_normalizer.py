import unittest

from domain.normalizers import (
    CONDITION_BUCKETS,
    CONDITION_TABLE,
    ConditionNormalizer,
    NormalizationTable,
    normalize_condition,
)


class ConditionNormalizerTestCase(unittest.TestCase):
    def test_empty_and_none_are_unknown(self) -> None:
        self.assertEqual(normalize_condition(""), "unknown")
        self.assertEqual(normalize_condition("   "), "unknown")
        self.assertEqual(normalize_condition(None), "unknown")

    def test_exact_lookup_is_case_and_space_insensitive(self) -> None:
        self.assertEqual(normalize_condition("defekt"), "broken")
        self.assertEqual(normalize_condition("  Sehr Gut Erhalten "), "used")
        self.assertEqual(normalize_condition("OVP"), "new")
        self.assertEqual(normalize_condition("for parts"), "broken")

    def test_like_new_collapses_into_used(self) -> None:
        for phrase in ("neuwertig", "wie neu", "like new", "comme neuf", "mint", "near mint"):
            with self.subTest(phrase=phrase):
                self.assertEqual(normalize_condition(phrase), "used")

    def test_table_only_produces_four_buckets(self) -> None:
        self.assertEqual(CONDITION_TABLE.canonical_values(), CONDITION_BUCKETS)

    def test_substring_fallback(self) -> None:
        self.assertEqual(normalize_condition("1x vorhanden, gebraucht"), "used")

    def test_substring_fallback_prefers_longest_key(self) -> None:
        self.assertEqual(normalize_condition("gerät ist nicht funktionsfähig!"), "broken")

    def test_substring_fallback_ignores_negation(self) -> None:
        # limite connue : seule une phrase de la table porte la négation
        self.assertEqual(normalize_condition("nicht neu"), "new")
        self.assertEqual(normalize_condition("nicht funktionsfähig"), "broken")

    def test_garbage_is_unknown(self) -> None:
        self.assertEqual(normalize_condition("25 eur"), "unknown")
        self.assertEqual(normalize_condition("nur abholung"), "unknown")
        self.assertEqual(normalize_condition("frisch gewaschen"), "unknown")

    def test_long_unmatched_input_is_unknown(self) -> None:
        text = "zustand siehe fotos und beschreibung bitte"
        self.assertGreater(len(text), 30)
        self.assertEqual(normalize_condition(text), "unknown")

    def test_unmatched_condition_like_literal_is_kept(self) -> None:
        self.assertEqual(normalize_condition("Zustand: befriedigend"), "zustand: befriedigend")

    def test_canonical_outputs_are_idempotent(self) -> None:
        for bucket in CONDITION_BUCKETS:
            with self.subTest(bucket=bucket):
                self.assertEqual(normalize_condition(bucket), bucket)
        literal = normalize_condition("Zustand: befriedigend")
        self.assertEqual(normalize_condition(literal), literal)

    def test_custom_table_is_injected(self) -> None:
        table = NormalizationTable(name="test", entries={"Fabriksneu": "new"})
        normalizer = ConditionNormalizer(table=table, keywords=("neu",))
        self.assertEqual(normalizer.normalize("fabriksneu"), "new")
        self.assertEqual(normalizer.normalize("defekt"), "unknown")


if __name__ == "__main__":
    unittest.main()
