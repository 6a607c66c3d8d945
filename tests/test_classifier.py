"""
Test cases for static gesture classification with synthetic hands.
"""
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from gesture_access.classifier import (
    GESTURE_RULES,
    UNKNOWN_GESTURE,
    GestureClassifier,
    classify_gesture,
    extract_features,
    gesture_catalog,
)
from gesture_access.types import GESTURE_ACTIONS, GestureResult

import synthetic_hands as hands
from synthetic_hands import make_hand


class TestRuleTable(unittest.TestCase):
    """Test the ordered rule table itself."""

    def test_rule_order(self):
        names = [rule.name for rule in GESTURE_RULES]
        self.assertEqual(names, [
            "Open Palm", "Thumbs Up", "Thumbs Down", "Fist", "Pinch", "OK Sign",
            "Peace Sign", "Pointing", "Three Fingers", "L-Shape", "Four Fingers",
            "Rock On", "Hang Loose",
        ])

    def test_actions_are_in_closed_set(self):
        for rule in GESTURE_RULES:
            self.assertIn(rule.action, GESTURE_ACTIONS)
        self.assertEqual(UNKNOWN_GESTURE.action, "none")

    def test_catalog_matches_rules(self):
        catalog = gesture_catalog()
        self.assertEqual(len(catalog), len(GESTURE_RULES))
        self.assertEqual(catalog[0], {"name": "Open Palm", "emoji": "✋", "action": "stop"})


class TestClassifyGesture(unittest.TestCase):
    """Test each gesture against a synthetic hand."""

    def assertGesture(self, hand, name, action):
        result = classify_gesture(hand)
        self.assertEqual(result.name, name)
        self.assertEqual(result.action, action)

    def test_open_palm(self):
        self.assertGesture(hands.OPEN_PALM, "Open Palm", "stop")

    def test_thumbs_up(self):
        self.assertGesture(hands.THUMBS_UP, "Thumbs Up", "confirm")

    def test_thumbs_down(self):
        self.assertGesture(hands.THUMBS_DOWN, "Thumbs Down", "reject")

    def test_fist(self):
        self.assertGesture(hands.FIST, "Fist", "start")

    def test_pinch(self):
        self.assertGesture(hands.PINCH, "Pinch", "zoom")

    def test_ok_sign(self):
        self.assertGesture(hands.OK_SIGN, "OK Sign", "toggle-theme")

    def test_peace_sign(self):
        self.assertGesture(hands.PEACE, "Peace Sign", "scroll")

    def test_pointing(self):
        self.assertGesture(hands.POINTING, "Pointing", "point")

    def test_three_fingers(self):
        self.assertGesture(hands.THREE_FINGERS, "Three Fingers", "scroll-up")

    def test_four_fingers(self):
        self.assertGesture(hands.FOUR_FINGERS, "Four Fingers", "next-section")

    def test_rock_on(self):
        self.assertGesture(hands.ROCK_ON, "Rock On", "top")

    def test_hang_loose(self):
        self.assertGesture(hands.HANG_LOOSE, "Hang Loose", "bottom")

    def test_unknown(self):
        self.assertEqual(classify_gesture(hands.UNKNOWN), UNKNOWN_GESTURE)

    def test_spread_thumb_with_curled_fingers_is_unknown(self):
        # Thumb out but neither above the index MCP nor below the wrist
        self.assertEqual(classify_gesture(make_hand(thumb="out")), UNKNOWN_GESTURE)


class TestPrecedence(unittest.TestCase):
    """Test that the first matching rule wins."""

    def test_open_palm_wins_for_any_thumb_extended_open_hand(self):
        for thumb in ("out", "up", "down"):
            for z in (0.0, -0.2, 0.3):
                hand = make_hand((True, True, True, True), thumb=thumb)
                hand = [lm._replace(z=z) for lm in hand]
                with self.subTest(thumb=thumb, z=z):
                    self.assertEqual(classify_gesture(hand).name, "Open Palm")

    def test_fist_is_never_thumbs_up_or_down(self):
        for thumb_tip in [(0.42, 0.80), (0.41, 0.30), (0.39, 0.95), (0.38, 0.55)]:
            hand = make_hand(overrides={4: thumb_tip})
            with self.subTest(thumb_tip=thumb_tip):
                self.assertFalse(extract_features(hand).thumb_extended)
                self.assertEqual(classify_gesture(hand).name, "Fist")

    def test_pointing_shadows_l_shape(self):
        hand = make_hand((True, False, False, False), thumb="out")
        features = extract_features(hand)
        self.assertTrue(features.thumb_extended)
        self.assertEqual(features.extended, (True, False, False, False))

        l_shape = next(rule for rule in GESTURE_RULES if rule.name == "L-Shape")
        self.assertTrue(l_shape.predicate(features))
        self.assertEqual(classify_gesture(hand).name, "Pointing")

    def test_pinch_precedes_pointing(self):
        features = extract_features(hands.PINCH)
        self.assertEqual(features.extended, (True, False, False, False))
        self.assertEqual(classify_gesture(hands.PINCH).name, "Pinch")

    def test_thumbs_up_precedes_fist_shape(self):
        self.assertEqual(extract_features(hands.THUMBS_UP).extended_count, 0)
        self.assertEqual(classify_gesture(hands.THUMBS_UP).name, "Thumbs Up")


class TestThresholds(unittest.TestCase):
    """Test the configurable thumb-index distance thresholds."""

    def setUp(self):
        # Index only, thumb tip 0.065 below the index tip
        self.hand = make_hand((True, False, False, False), overrides={4: (0.45, 0.415)})

    def test_default_pinch_threshold(self):
        self.assertAlmostEqual(extract_features(self.hand).thumb_index_distance, 0.065, places=6)
        self.assertEqual(classify_gesture(self.hand).name, "Pointing")

    def test_wider_pinch_threshold(self):
        classifier = GestureClassifier(pinch_distance=0.1)
        self.assertEqual(classifier(self.hand).name, "Pinch")

    def test_ok_threshold(self):
        hand = make_hand((False, True, True, True), overrides={4: (0.45, 0.645)})
        self.assertEqual(classify_gesture(hand).name, "OK Sign")
        self.assertEqual(GestureClassifier(ok_distance=0.05)(hand).name, "Unknown")

    def test_z_counts_towards_distance(self):
        hand = list(hands.PINCH)
        hand[4] = hand[4]._replace(z=0.1)
        self.assertEqual(classify_gesture(hand).name, "Pointing")


class TestPurity(unittest.TestCase):
    """Test that classification has no hidden state."""

    def test_same_hand_same_result(self):
        first = classify_gesture(hands.PEACE)
        classify_gesture(hands.FIST)
        second = classify_gesture(hands.PEACE)
        self.assertIsInstance(first, GestureResult)
        self.assertEqual(first, second)

    def test_classifier_matches_function(self):
        classifier = GestureClassifier()
        for hand in (hands.OPEN_PALM, hands.OK_SIGN, hands.ROCK_ON, hands.UNKNOWN):
            self.assertEqual(classifier(hand), classify_gesture(hand))


if __name__ == '__main__':
    unittest.main()
