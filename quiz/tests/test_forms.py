from django.test import TestCase

from core.exceptions import ValidationFailed
from quiz.forms import CheckAnswerForm, clean_answers, clean_quiz_payload

from .helpers import make_category


def published_payload(**overrides):
    payload = {
        "title": "Solar system",
        "category_id": make_category().pk,
        "status": "published",
        "questions": [
            {"content": "Largest planet?", "options": ["Mars", "Jupiter"], "correct_indices": [1]},
        ],
    }
    payload.update(overrides)
    return payload


class CheckAnswerFormTests(TestCase):
    def test_accepts_empty_selection(self):
        form = CheckAnswerForm(data={"question_id": 3, "selected_indices": []})
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data["selected_indices"], [])

    def test_rejects_bad_indices(self):
        for selected in [[-1], ["1"], [True], "0", None]:
            with self.subTest(selected=selected):
                form = CheckAnswerForm(data={"question_id": 3, "selected_indices": selected})
                self.assertFalse(form.is_valid())
                self.assertIn("selected_indices", form.errors)

    def test_rejects_bad_question_id(self):
        self.assertFalse(CheckAnswerForm(data={"question_id": 0, "selected_indices": [0]}).is_valid())


class CleanAnswersTests(TestCase):
    def test_collects_answers_and_times(self):
        answers, times = clean_answers([
            {"question_id": 1, "selected_indices": [0, 2]},
            {"question_id": 2, "selected_indices": [], "time_spent": 7},
        ])
        self.assertEqual(answers, {1: [0, 2], 2: []})
        self.assertEqual(times, {2: 7})

    def test_errors_are_keyed_by_position(self):
        with self.assertRaises(ValidationFailed) as caught:
            clean_answers([{"question_id": 1, "selected_indices": [0]}, {"question_id": 2, "selected_indices": [-3]}])
        self.assertIn("1", caught.exception.details["answers"])

    def test_rejects_non_list(self):
        with self.assertRaises(ValidationFailed):
            clean_answers({"question_id": 1})


class CleanQuizPayloadTests(TestCase):
    def test_valid_published_quiz(self):
        quiz_data, questions = clean_quiz_payload(published_payload())
        self.assertTrue(quiz_data["is_public"])
        self.assertEqual(quiz_data["passing_score"], 60)
        self.assertEqual(questions[0]["points"], 10)

    def test_draft_may_be_incomplete(self):
        quiz_data, questions = clean_quiz_payload({
            "title": "X", "status": "draft", "questions": [{"content": "", "options": ["only one"]}],
        })
        self.assertIsNone(quiz_data["category_id"])
        self.assertEqual(questions[0]["correct_indices"], [])

    def test_publishing_requires_category_and_questions(self):
        with self.assertRaises(ValidationFailed) as caught:
            clean_quiz_payload(published_payload(category_id=None, questions=[]))
        self.assertIn("category_id", caught.exception.details)
        self.assertIn("questions", caught.exception.details)

    def test_publish_rules_per_question(self):
        cases = {
            "too few options": {"content": "Q", "options": ["a"], "correct_indices": [0]},
            "blank option": {"content": "Q", "options": ["a", " "], "correct_indices": [0]},
            "too many options": {"content": "Q", "options": list("abcdefg"), "correct_indices": [0]},
            "no correct answer": {"content": "Q", "options": ["a", "b"], "correct_indices": []},
            "index out of range": {"content": "Q", "options": ["a", "b"], "correct_indices": [2]},
            "two answers on single choice": {"content": "Q", "options": ["a", "b"], "correct_indices": [0, 1]},
            "missing content": {"content": "", "options": ["a", "b"], "correct_indices": [0]},
        }
        for name, question in cases.items():
            with self.subTest(name), self.assertRaises(ValidationFailed) as caught:
                clean_quiz_payload(published_payload(questions=[question]))
            self.assertIn("0", caught.exception.details["questions"])

    def test_multiple_choice_allows_several_answers(self):
        _, questions = clean_quiz_payload(published_payload(questions=[
            {"content": "Q", "options": ["a", "b", "c"], "correct_indices": [0, 2], "is_multiple_choice": True},
        ]))
        self.assertEqual(questions[0]["correct_indices"], [0, 2])

    def test_title_length_for_publishing(self):
        with self.assertRaises(ValidationFailed) as caught:
            clean_quiz_payload(published_payload(title="Hi"))
        self.assertIn("title", caught.exception.details)
