"""
Vyhodnocení odpovědí a bodování.

Otázka je zodpovězená správně právě tehdy, když se množina vybraných indexů
rovná množině správných. Na pořadí a duplicitách nezáleží a částečné body
se neudělují.
"""
import logging
from dataclasses import dataclass, field

from django.db import transaction
from django.db.models import Avg, F

from accounts.models import Profile
from core.exceptions import NotFound

from .models import AnswerHistory, Question, Quiz, Score

logger = logging.getLogger(__name__)


def evaluate(selected, correct) -> bool:
    """
    Rozhodne, zda ``selected`` odpovídá ``correct``.

    Oba argumenty jsou iterovatelné indexy možností a porovnávají se jako
    množiny, takže ``evaluate([1, 0, 1], [0, 1])`` je True. Prázdná odpověď
    je správná jen u otázky bez správných možností.
    """
    return set(selected) == set(correct)


@dataclass(frozen=True)
class AnswerCheck:
    is_correct: bool
    correct_indices: list
    explanation: str

    def as_dict(self):
        return {
            "is_correct": self.is_correct,
            "correct_indices": self.correct_indices,
            "explanation": self.explanation or None,
        }


def check_answer(quiz_id, question_id, selected, user=None) -> AnswerCheck:
    """
    Zkontroluje jednu odpověď kvízu.

    Args:
        quiz_id: kvíz, do kterého musí otázka patřit
        question_id: zodpovídaná otázka
        selected: zvalidované nezáporné indexy možností
        user: volající, podle něj se určuje viditelnost kvízu

    Raises:
        NotFound: otázka do kvízu nepatří, nebo kvíz ``user`` nevidí.
            Pro volajícího oba případy vypadají stejně.
    """
    question = (
        Question.objects
        .select_related("quiz")
        .filter(pk=question_id, quiz_id=quiz_id)
        .first()
    )
    if question is None or not question.quiz.is_visible_to(user):
        raise NotFound("Question")
    return AnswerCheck(
        is_correct=evaluate(selected, question.correct_indices),
        correct_indices=sorted(set(question.correct_indices)),
        explanation=question.explanation,
    )


@dataclass
class QuestionResult:
    question: Question
    selected_indices: list
    is_correct: bool
    answered: bool

    def as_dict(self):
        return {
            "question_id": self.question.pk,
            "content": self.question.content,
            "options": self.question.options,
            "selected_indices": self.selected_indices,
            "correct_indices": sorted(set(self.question.correct_indices)),
            "is_correct": self.is_correct,
            "explanation": self.question.explanation or None,
            "points": self.question.points,
        }


@dataclass
class Grade:
    score: int = 0
    max_score: int = 0
    correct_count: int = 0
    total_count: int = 0
    passing_score: int = 0
    results: list = field(default_factory=list)

    @property
    def percentage(self) -> float:
        return (self.score / self.max_score) * 100 if self.max_score > 0 else 0.0

    @property
    def passed(self) -> bool:
        return self.percentage >= self.passing_score


def grade_submission(quiz, answers) -> Grade:
    """
    Ohodnotí celou hru kvízu ``quiz``.

    Args:
        quiz: hraný Quiz
        answers: slovník id otázky -> vybrané indexy možností.
            Chybějící otázky se počítají jako špatně; id, která do kvízu
            nepatří, se ignorují.

    Returns:
        Grade se součty a jedním QuestionResult pro každou otázku v pořadí kvízu.
    """
    grade = Grade(passing_score=quiz.passing_score)
    for question in quiz.questions.all():
        grade.max_score += question.points
        grade.total_count += 1
        answered = question.pk in answers
        selected = sorted(set(answers.get(question.pk, [])))
        is_correct = answered and evaluate(selected, question.correct_indices)
        if is_correct:
            grade.score += question.points
            grade.correct_count += 1
        grade.results.append(QuestionResult(question, selected, is_correct, answered))
    return grade


def record_submission(user, quiz, answers, time_spent=None, answer_times=None):
    """
    Ohodnotí hru a uloží ji.

    Vše proběhne v jedné transakci: řádek Score, jeden řádek AnswerHistory
    pro každou zodpovězenou otázku, počet her a průměr kvízu a čítače v
    profilu hráče. Čítače se zvyšují přes ``F()`` výrazy, souběžná odeslání
    tak o přírůstky nepřijdou.

    Returns:
        Dvojice uloženého Score a Grade, ze kterého vzniklo.
    """
    answer_times = answer_times or {}
    grade = grade_submission(quiz, answers)
    with transaction.atomic():
        score = Score.objects.create(
            user=user,
            quiz=quiz,
            score=grade.score,
            max_score=grade.max_score,
            percentage=grade.percentage,
            correct_count=grade.correct_count,
            total_count=grade.total_count,
            time_spent=time_spent,
        )
        AnswerHistory.objects.bulk_create([
            AnswerHistory(
                user=user,
                question=result.question,
                score=score,
                selected_indices=result.selected_indices,
                is_correct=result.is_correct,
                time_spent=answer_times.get(result.question.pk),
            )
            for result in grade.results if result.answered
        ])
        Quiz.objects.filter(pk=quiz.pk).update(play_count=F("play_count") + 1)
        avg = Score.objects.filter(quiz=quiz).aggregate(avg=Avg("percentage"))["avg"]
        Quiz.objects.filter(pk=quiz.pk).update(avg_score=avg)
        Profile.objects.filter(user=user).update(
            total_score=F("total_score") + grade.score,
            quizzes_taken=F("quizzes_taken") + 1,
        )
    logger.info(
        "User %s scored %d/%d on quiz %s", user.pk, grade.score, grade.max_score, quiz.pk
    )
    return score, grade


def stored_results(score):
    """Sestaví výsledky jednotlivých otázek uložené hry z historie odpovědí."""
    history = {answer.question_id: answer for answer in score.answers.all()}
    results = []
    for question in score.quiz.questions.all():
        answer = history.get(question.pk)
        results.append(QuestionResult(
            question=question,
            selected_indices=answer.selected_indices if answer else [],
            is_correct=answer.is_correct if answer else False,
            answered=answer is not None,
        ))
    return results
