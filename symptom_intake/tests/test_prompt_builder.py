import unittest

from symptom_intake.diagnosis.prompt_builder import (
    build_diagnosis_prompt,
    describe_patient,
    describe_symptoms,
)
from symptom_intake.models import PatientProfile, Sex, SymptomReport


class PromptBuilderTests(unittest.TestCase):
    def test_age_defaults_to_thirty(self) -> None:
        self.assertEqual(describe_patient(PatientProfile()), "Patient: 30 years old")

    def test_full_profile_clause(self) -> None:
        profile = PatientProfile(age=45, sex=Sex.FEMALE, weight=70, height=175)

        self.assertEqual(
            describe_patient(profile),
            "Patient: 45 years old, Female, 70kg, 175cm, BMI: 22.9",
        )

    def test_weight_without_height_is_omitted(self) -> None:
        profile = PatientProfile(age=20, sex=Sex.OTHER, weight=80)
        self.assertEqual(describe_patient(profile), "Patient: 20 years old, Other")

    def test_explicit_bmi_is_kept(self) -> None:
        profile = PatientProfile(bmi=31.5)
        self.assertEqual(describe_patient(profile), "Patient: 30 years old, BMI: 31.5")

    def test_symptom_suffixes_only_when_present(self) -> None:
        text = describe_symptoms(
            [
                SymptomReport(name="Fever", duration=3, intensity=7),
                SymptomReport(name="Cough", duration=2),
                SymptomReport(name="Fatigue", intensity=4),
                SymptomReport(name="Nausea"),
            ]
        )

        self.assertEqual(
            text,
            "Fever (for 3 days) [intensity: 7/10], Cough (for 2 days), "
            "Fatigue [intensity: 4/10], Nausea",
        )

    def test_history_and_allergy_lines(self) -> None:
        prompt = build_diagnosis_prompt(
            [SymptomReport(name="Fever")],
            PatientProfile(medical_history=["diabetes", "asthma"], allergies=["penicillin"]),
        )

        self.assertIn("\nMedical history: diabetes, asthma", prompt)
        self.assertIn("\nKnown allergies: penicillin", prompt)

    def test_empty_lists_produce_no_fragment(self) -> None:
        prompt = build_diagnosis_prompt([SymptomReport(name="Fever")], PatientProfile())

        self.assertNotIn("Medical history", prompt)
        self.assertNotIn("allergies", prompt.lower())
        self.assertTrue(prompt.startswith("Patient: 30 years old\nDetailed symptoms: Fever."))

    def test_prompt_asks_for_three_diagnoses_in_json(self) -> None:
        prompt = build_diagnosis_prompt([SymptomReport(name="Fever")])

        self.assertIn("exactly 3 probable diagnoses", prompt)
        for key in ('"diseases"', '"name"', '"probability"', '"description"', '"treatments"', '"urgent_warnings"'):
            self.assertIn(key, prompt)


if __name__ == "__main__":
    unittest.main()
