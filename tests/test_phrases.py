"""
Test cases for phrases, the sentence builder, history and quality hints.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from signbridge.classifier import GESTURE_LABELS
from signbridge.history import GestureHistory
from signbridge.phrases import ASL_ALPHABET, COMMON_PHRASES, describe, text_to_signs
from signbridge.quality import confidence_level, recognition_issues
from signbridge.sentence import SentenceBuilder


class TestPhrases(unittest.TestCase):
    """Test label descriptions and the alphabet chart."""

    def test_every_label_has_a_phrase(self):
        for label in GESTURE_LABELS:
            with self.subTest(label=label):
                phrase = describe(label)
                self.assertTrue(phrase)
                self.assertNotEqual(phrase, label)

    def test_known_phrases(self):
        self.assertEqual(describe("THUMBS_UP"), "Yes, that's correct!")
        self.assertEqual(describe("I_LOVE_YOU"), "I love you!")
        self.assertEqual(describe("K"), "K - Okay, or K")

    def test_unknown_and_empty(self):
        self.assertEqual(describe("Z"), "Z")
        self.assertEqual(describe(None), "")
        self.assertEqual(describe(""), "")

    def test_alphabet_chart(self):
        self.assertEqual(len(ASL_ALPHABET), 15)
        self.assertNotIn("J", ASL_ALPHABET)
        self.assertNotIn("Z", ASL_ALPHABET)
        positions = ASL_ALPHABET["Y"].finger_positions()
        self.assertEqual(positions["thumb"], "extended")
        self.assertEqual(positions["pinky"], "extended")
        self.assertEqual(positions["index"], "folded")
        self.assertIn("peace", COMMON_PHRASES)

    def test_text_to_signs(self):
        self.assertEqual(text_to_signs("hello"), ["H", "E", "L", "L", "O"])
        self.assertEqual(text_to_signs("Jazz 123!"), ["A"])
        self.assertEqual(text_to_signs(""), [])


class TestSentenceBuilder(unittest.TestCase):

    def test_letters_only(self):
        sentence = SentenceBuilder()
        self.assertTrue(sentence.add("H"))
        self.assertTrue(sentence.add("I"))
        self.assertFalse(sentence.add("THUMBS_UP"))
        self.assertFalse(sentence.add(None))
        self.assertEqual(sentence.text, "HI")

    def test_editing(self):
        sentence = SentenceBuilder()
        for letter in "AB":
            sentence.add(letter)
        sentence.add_space()
        sentence.add("C")
        self.assertEqual(sentence.text, "AB C")
        sentence.backspace()
        sentence.backspace()
        self.assertEqual(sentence.text, "AB")
        self.assertEqual(len(sentence), 2)
        sentence.clear()
        sentence.backspace()
        self.assertEqual(sentence.text, "")


class TestGestureHistory(unittest.TestCase):

    def test_newest_first(self):
        history = GestureHistory()
        history.add("A", "A - Fist bump!", 0.85)
        latest = history.add("V", "Peace! Victory!", 0.9)
        self.assertIs(history.latest, latest)
        self.assertEqual([item.gesture for item in history.items()], ["V", "A"])

    def test_bounded(self):
        history = GestureHistory(max_items=3)
        for label in "ABDIW":
            history.add(label, describe(label))
        self.assertEqual(len(history), 3)
        self.assertEqual([item.gesture for item in history.items()], ["W", "I", "D"])

    def test_ids_unique_and_findable(self):
        history = GestureHistory(max_items=2)
        first = history.add("A", "a")
        second = history.add("B", "b")
        self.assertNotEqual(first.id, second.id)
        self.assertIs(history.find(second.id), second)
        history.add("D", "d")
        self.assertIsNone(history.find(first.id))

    def test_clear(self):
        history = GestureHistory()
        history.add("A", "a")
        history.clear()
        self.assertEqual(len(history), 0)
        self.assertIsNone(history.latest)


class TestQualityHints(unittest.TestCase):

    def test_confidence_level(self):
        self.assertEqual(confidence_level(0.95), "high")
        self.assertEqual(confidence_level(0.8), "high")
        self.assertEqual(confidence_level(0.6), "medium")
        self.assertEqual(confidence_level(0.1), "low")

    def test_issues(self):
        self.assertEqual(recognition_issues(True, 0.9, "good"), [])
        self.assertEqual(recognition_issues(False, 0.0), ["No hand detected in frame"])
        self.assertEqual(recognition_issues(True, 0.0), ["Gesture unclear - try holding steady"])
        issues = recognition_issues(True, 0.9, "poor")
        self.assertEqual(issues, ["Low lighting may affect accuracy"])


if __name__ == '__main__':
    unittest.main()
