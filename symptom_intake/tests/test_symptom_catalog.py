import unittest

from symptom_intake.symptom_catalog import search_symptoms


class SymptomCatalogTests(unittest.TestCase):
    def test_matches_name_case_insensitively(self) -> None:
        results = search_symptoms("FEVER")
        self.assertEqual([s.id for s in results], ["Fever"])
        self.assertEqual(results[0].category, "General")

    def test_matches_catalog_id(self) -> None:
        self.assertEqual([s.name for s in search_symptoms("shortnessof")], ["Shortness of breath"])

    def test_blank_query_returns_empty_list(self) -> None:
        self.assertEqual(search_symptoms(""), [])
        self.assertEqual(search_symptoms("   "), [])

    def test_unknown_symptom_returns_empty_list(self) -> None:
        self.assertEqual(search_symptoms("ear pain"), [])

    def test_results_are_fresh_objects(self) -> None:
        first = search_symptoms("cough")[0]
        second = search_symptoms("cough")[0]
        self.assertEqual(first, second)
        self.assertIsNot(first, second)


if __name__ == "__main__":
    unittest.main()
