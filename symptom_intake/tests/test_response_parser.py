import unittest

from symptom_intake.diagnosis.parser import parse_diagnosis_response
from symptom_intake.errors import ParseError
from symptom_intake.llm.json_utils import extract_json_object


class JsonUtilsTests(unittest.TestCase):
    def test_extract_drops_markdown_fence(self) -> None:
        self.assertEqual(extract_json_object('```json\n{"a": 1}\n```'), '{"a": 1}')

    def test_extract_slices_first_to_last_brace(self) -> None:
        self.assertEqual(
            extract_json_object('Result: {"a": {"b": 2}} done.'),
            '{"a": {"b": 2}}',
        )

    def test_extract_returns_none_without_braces(self) -> None:
        self.assertIsNone(extract_json_object("no json here"))
        self.assertIsNone(extract_json_object("} backwards {"))


class DiagnosisResponseParserTests(unittest.TestCase):
    def test_parses_json_wrapped_in_prose(self) -> None:
        raw = 'Sure! Here is the result: {"diseases":[{"name":"Flu","probability":70}]} Thanks'

        candidates = parse_diagnosis_response(raw)

        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0].name, "Flu")
        self.assertEqual(candidates[0].probability, 70)
        self.assertEqual(candidates[0].rank, 1)
        self.assertEqual(candidates[0].description, "")
        self.assertEqual(candidates[0].treatments, [])

    def test_rank_follows_array_order_not_probability(self) -> None:
        raw = '{"diseases":[{"name":"B","probability":30},{"name":"A","probability":90}]}'

        candidates = parse_diagnosis_response(raw)

        self.assertEqual([(c.name, c.rank) for c in candidates], [("B", 1), ("A", 2)])

    def test_full_entry_fields(self) -> None:
        raw = """```json
        {
          "diseases": [
            {
              "name": "Migraine",
              "probability": "65%",
              "description": "Recurrent headache.",
              "treatments": ["Rest", "Analgesics"],
              "whenToSeeDoctorUrgently": ["Worst headache of life"]
            }
          ]
        }
        ```"""

        candidate = parse_diagnosis_response(raw)[0]

        self.assertEqual(candidate.probability, 65)
        self.assertEqual(candidate.description, "Recurrent headache.")
        self.assertEqual(candidate.treatments, ["Rest", "Analgesics"])
        self.assertEqual(candidate.urgent_warnings, ["Worst headache of life"])

    def test_probability_is_clamped(self) -> None:
        raw = '{"diseases":[{"name":"X","probability":140},{"name":"Y","probability":-5}]}'
        self.assertEqual([c.probability for c in parse_diagnosis_response(raw)], [100, 0])

    def test_malformed_entries_are_skipped_and_ranks_stay_contiguous(self) -> None:
        raw = '{"diseases":["oops",{"probability":50},{"name":"Cold"}]}'

        candidates = parse_diagnosis_response(raw)

        self.assertEqual([(c.name, c.rank) for c in candidates], [("Cold", 1)])

    def test_missing_braces_raises(self) -> None:
        with self.assertRaises(ParseError):
            parse_diagnosis_response("I cannot help with that.")

    def test_invalid_json_raises(self) -> None:
        with self.assertRaises(ParseError):
            parse_diagnosis_response('{"diseases": [ {"name": "Flu", } ')

    def test_missing_diseases_field_raises(self) -> None:
        with self.assertRaises(ParseError):
            parse_diagnosis_response('{"conditions": []}')
        with self.assertRaises(ParseError):
            parse_diagnosis_response('{"diseases": "Flu"}')


if __name__ == "__main__":
    unittest.main()
