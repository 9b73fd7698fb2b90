import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.scoring import get_scoring_policy  # noqa: E402
from app.features.signals import SIGNAL_EXTRACTORS, extract_signals  # noqa: E402
from app.normalize.text import normalize_resume_text  # noqa: E402


def _signals(text: str):
    return extract_signals(normalize_resume_text(text), get_scoring_policy())


class TextNormalizerTests(unittest.TestCase):
    def test_exposes_raw_and_lowercased_text(self):
        normalized = normalize_resume_text("Jane DOE\nSKILLS")
        self.assertEqual(normalized.raw, "Jane DOE\nSKILLS")
        self.assertEqual(normalized.lower, "jane doe\nskills")

    def test_none_is_treated_as_empty(self):
        normalized = normalize_resume_text(None)
        self.assertEqual(normalized.raw, "")
        self.assertEqual(normalized.lower, "")


class ContactInfoSignalTests(unittest.TestCase):
    def test_detects_email_phone_and_linkedin(self):
        contact = _signals("john.doe@email.com | (555) 123-4567 | LinkedIn: /in/johndoe").contact_info
        self.assertTrue(contact.has_email)
        self.assertTrue(contact.has_phone)
        self.assertTrue(contact.has_linkedin)

    def test_dotted_phone_without_linkedin(self):
        contact = _signals("Reach me at jane@example.org or 555.123.4567").contact_info
        self.assertTrue(contact.has_email)
        self.assertTrue(contact.has_phone)
        self.assertFalse(contact.has_linkedin)

    def test_long_local_part_is_still_an_email(self):
        contact = _signals("a" * 70 + "@example.com").contact_info
        self.assertTrue(contact.has_email)

    def test_non_ascii_digits_are_not_a_phone(self):
        contact = _signals("Call ٥٥٥-١٢٣-٤٥٦٧").contact_info
        self.assertFalse(contact.has_phone)

    def test_missing_contact_details(self):
        contact = _signals("John\nNo contact info").contact_info
        self.assertFalse(contact.has_email)
        self.assertFalse(contact.has_phone)
        self.assertFalse(contact.has_linkedin)


class QuantifiableSignalTests(unittest.TestCase):
    def test_counts_percent_thousands_and_plus_markers(self):
        signals = _signals("Grew revenue 30%, saved 100k, 3+ years of work, $5 budget")
        self.assertEqual(signals.quantifiable_achievements.count, 3)

    def test_marker_suffix_is_case_sensitive(self):
        self.assertEqual(_signals("Served 10K users").quantifiable_achievements.count, 0)

    def test_only_ascii_digits_count(self):
        self.assertEqual(_signals("Cut costs by ٣٠%").quantifiable_achievements.count, 0)
        self.assertEqual(_signals("Cut costs by ٣٠% then 30%").quantifiable_achievements.count, 1)

    def test_plain_numbers_do_not_count(self):
        self.assertEqual(_signals("Team of 5 engineers since 2019").quantifiable_achievements.count, 0)


class ActionVerbSignalTests(unittest.TestCase):
    def test_each_verb_counted_once(self):
        signals = _signals("Led the team. Led the migration. Managed budgets.")
        self.assertEqual(signals.action_verbs.count, 2)
        self.assertEqual(signals.action_verbs.verbs, ("led", "managed"))

    def test_verb_inside_another_word_counts(self):
        self.assertEqual(_signals("Highly skilled engineer").action_verbs.count, 1)

    def test_inflected_forms_do_not_count(self):
        self.assertEqual(_signals("implementing and developing").action_verbs.count, 0)


class SpellingSignalTests(unittest.TestCase):
    def test_reports_known_misspellings_in_dictionary_order(self):
        signals = _signals("Managment of teh project")
        self.assertEqual(signals.spelling.misspellings, ("teh", "managment"))

    def test_clean_text_has_no_misspellings(self):
        self.assertEqual(_signals("Management of the project").spelling.misspellings, ())


class SectionSignalTests(unittest.TestCase):
    def test_detects_all_sections(self):
        sections = _signals("PROFILE\nWORK HISTORY\nCollege degree\nTechnologies").sections
        self.assertTrue(sections.has_summary)
        self.assertTrue(sections.has_experience)
        self.assertTrue(sections.has_education)
        self.assertTrue(sections.has_skills)

    def test_empty_text_has_no_sections(self):
        sections = _signals("").sections
        self.assertFalse(sections.has_summary)
        self.assertFalse(sections.has_experience)
        self.assertFalse(sections.has_education)
        self.assertFalse(sections.has_skills)


class SignalBundleTests(unittest.TestCase):
    def test_every_registered_extractor_lands_in_the_bundle(self):
        signals = _signals("anything")
        for name in SIGNAL_EXTRACTORS:
            self.assertTrue(hasattr(signals, name))

    def test_extractors_tolerate_binary_garbage(self):
        garbage = bytes(range(256)).decode("latin-1") * 50
        signals = _signals(garbage)
        self.assertGreaterEqual(signals.quantifiable_achievements.count, 0)


if __name__ == "__main__":
    unittest.main()
