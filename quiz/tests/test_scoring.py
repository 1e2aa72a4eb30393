import itertools

from django.test import SimpleTestCase, TestCase

from accounts.models import Profile
from core.exceptions import NotFound
from quiz.models import AnswerHistory, Quiz
from quiz.scoring import check_answer, evaluate, grade_submission, record_submission, stored_results

from .helpers import make_quiz, make_user


class EvaluateTests(SimpleTestCase):
    def test_empty_sets(self):
        self.assertTrue(evaluate([], []))
        self.assertFalse(evaluate([0], []))
        self.assertFalse(evaluate([], [0]))

    def test_order_and_duplicates_do_not_matter(self):
        self.assertTrue(evaluate([1, 0, 1], [0, 1]))
        self.assertTrue(evaluate((2, 0), [0, 2, 2]))

    def test_no_partial_credit(self):
        self.assertFalse(evaluate([0], [0, 1]))
        self.assertFalse(evaluate([0, 1, 2], [0, 1]))

    def test_matches_sorted_deduplicated_comparison(self):
        pool = [[], [0], [1], [0, 1], [1, 0, 1], [2, 2], [0, 1, 2]]
        for selected, correct in itertools.product(pool, repeat=2):
            with self.subTest(selected=selected, correct=correct):
                expected = sorted(set(selected)) == sorted(set(correct))
                self.assertEqual(evaluate(selected, correct), expected)


class CheckAnswerTests(TestCase):
    def setUp(self):
        self.author = make_user("author")
        self.quiz = make_quiz(self.author)
        self.other = make_quiz(self.author, title="Other")
        self.question = self.quiz.questions.first()

    def test_verdict_with_correct_indices_and_explanation(self):
        result = check_answer(self.quiz.pk, self.question.pk, [2])
        self.assertTrue(result.is_correct)
        self.assertEqual(result.as_dict(), {
            "is_correct": True, "correct_indices": [2], "explanation": "Explanation 1",
        })
        self.assertFalse(check_answer(self.quiz.pk, self.question.pk, [0]).is_correct)

    def test_question_from_another_quiz_is_not_found(self):
        foreign = self.other.questions.first()
        with self.assertRaises(NotFound):
            check_answer(self.quiz.pk, foreign.pk, [2])

    def test_hidden_quiz_is_not_found_for_others(self):
        draft = make_quiz(self.author, status=Quiz.Status.DRAFT)
        question = draft.questions.first()
        with self.assertRaises(NotFound):
            check_answer(draft.pk, question.pk, [2], user=make_user("stranger"))
        self.assertTrue(check_answer(draft.pk, question.pk, [2], user=self.author).is_correct)


class GradeTests(TestCase):
    def setUp(self):
        self.author = make_user("author")
        self.quiz = make_quiz(self.author, questions=[
            (["a", "b"], [0]),
            (["a", "b", "c"], [0, 2]),
            (["a", "b"], [1]),
        ])
        self.q1, self.q2, self.q3 = self.quiz.questions.all()

    def test_grade_counts_points_per_question(self):
        grade = grade_submission(self.quiz, {self.q1.pk: [0], self.q2.pk: [2, 0, 0], self.q3.pk: [0]})
        self.assertEqual((grade.score, grade.max_score), (20, 30))
        self.assertEqual((grade.correct_count, grade.total_count), (2, 3))
        self.assertAlmostEqual(grade.percentage, 200 / 3)
        self.assertTrue(grade.passed)

    def test_missing_answers_are_wrong_and_foreign_ids_ignored(self):
        grade = grade_submission(self.quiz, {self.q1.pk: [0], 999999: [0]})
        self.assertEqual(grade.correct_count, 1)
        self.assertEqual([r.answered for r in grade.results], [True, False, False])

    def test_empty_quiz_scores_zero_percent(self):
        empty = make_quiz(self.author, title="Empty", questions=[])
        self.assertEqual(grade_submission(empty, {}).percentage, 0.0)

    def test_record_submission_updates_counters(self):
        player = make_user("player")
        score, grade = record_submission(player, self.quiz, {self.q1.pk: [0], self.q2.pk: [0]}, time_spent=42,
                                         answer_times={self.q1.pk: 5})
        self.assertEqual(score.score, 10)
        self.assertEqual(score.time_spent, 42)
        self.assertEqual(AnswerHistory.objects.filter(score=score).count(), 2)
        self.assertEqual(AnswerHistory.objects.get(score=score, question=self.q1).time_spent, 5)

        self.quiz.refresh_from_db()
        self.assertEqual(self.quiz.play_count, 1)
        self.assertAlmostEqual(self.quiz.avg_score, 100 / 3)

        profile = Profile.objects.get(user=player)
        self.assertEqual((profile.total_score, profile.quizzes_taken), (10, 1))

        record_submission(player, self.quiz, {self.q1.pk: [0], self.q2.pk: [0, 2], self.q3.pk: [1]})
        self.quiz.refresh_from_db()
        self.assertEqual(self.quiz.play_count, 2)
        self.assertAlmostEqual(self.quiz.avg_score, (100 / 3 + 100) / 2)

    def test_stored_results_rebuild_the_play(self):
        player = make_user("player")
        score, _ = record_submission(player, self.quiz, {self.q2.pk: [2, 0]})
        results = stored_results(score)
        self.assertEqual([r.is_correct for r in results], [False, True, False])
        self.assertEqual(results[1].selected_indices, [0, 2])
        self.assertFalse(results[0].answered)
