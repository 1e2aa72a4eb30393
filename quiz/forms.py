"""
Formuláře pro validaci vstupu kvízů.

Sdílí je JSON API i HTML stránky. Tělo JSON požadavku se předává přímo jako
``data``; seznamová pole používají ``IndexListField`` a ``StringListField``,
protože obyčejné Django formuláře vlastní seznamové pole nemají.
"""
from django import forms

from core.exceptions import ValidationFailed

from .models import Category, Comment, Quiz

MAX_OPTIONS = 6
MIN_OPTIONS = 2


class IndexListField(forms.Field):
    """
    Seznam nezáporných celočíselných indexů možností.

    Prázdný seznam je platná hodnota; ``required`` hlídá jen chybějící
    hodnotu. Booleany se odmítají, přestože ``bool`` dědí z ``int``.
    """
    default_error_messages = {
        "invalid": "Enter a list of option indices.",
        "invalid_index": "Option indices must be non-negative integers.",
        "min_length": "Select at least %(min)d option(s).",
    }

    def __init__(self, *, min_length=0, **kwargs):
        self.min_length = min_length
        super().__init__(**kwargs)

    def to_python(self, value):
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        indices = []
        for item in value:
            if isinstance(item, bool) or not isinstance(item, int) or item < 0:
                raise forms.ValidationError(self.error_messages["invalid_index"], code="invalid_index")
            indices.append(item)
        return indices

    def validate(self, value):
        if value is None:
            if self.required:
                raise forms.ValidationError(self.error_messages["required"], code="required")
            return
        if len(value) < self.min_length:
            raise forms.ValidationError(
                self.error_messages["min_length"], code="min_length", params={"min": self.min_length}
            )

    def clean(self, value):
        value = super().clean(value)
        return [] if value is None else value


class StringListField(forms.Field):
    """Seznam řetězců s volitelnými limity délky a prázdných položek."""
    default_error_messages = {
        "invalid": "Enter a list of strings.",
        "blank_item": "Items may not be blank.",
        "min_length": "Enter at least %(min)d item(s).",
        "max_length": "Enter at most %(max)d item(s).",
        "item_too_long": "Items may be at most %(max)d characters.",
    }

    def __init__(self, *, min_length=0, max_length=None, allow_blank_items=True, max_item_length=200, **kwargs):
        self.min_length = min_length
        self.max_length = max_length
        self.allow_blank_items = allow_blank_items
        self.max_item_length = max_item_length
        super().__init__(**kwargs)

    def to_python(self, value):
        if value is None:
            return None
        if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        return [item.strip() for item in value]

    def validate(self, value):
        if value is None:
            if self.required:
                raise forms.ValidationError(self.error_messages["required"], code="required")
            return
        if len(value) < self.min_length:
            raise forms.ValidationError(self.error_messages["min_length"], code="min_length", params={"min": self.min_length})
        if self.max_length is not None and len(value) > self.max_length:
            raise forms.ValidationError(self.error_messages["max_length"], code="max_length", params={"max": self.max_length})
        if not self.allow_blank_items and any(not item for item in value):
            raise forms.ValidationError(self.error_messages["blank_item"], code="blank_item")
        if any(len(item) > self.max_item_length for item in value):
            raise forms.ValidationError(self.error_messages["item_too_long"], code="item_too_long", params={"max": self.max_item_length})

    def clean(self, value):
        value = super().clean(value)
        return [] if value is None else value


# ===== ODPOVĚDI =====

class CheckAnswerForm(forms.Form):
    question_id = forms.IntegerField(min_value=1)
    selected_indices = IndexListField()


class AnswerForm(forms.Form):
    question_id = forms.IntegerField(min_value=1)
    selected_indices = IndexListField()
    time_spent = forms.IntegerField(min_value=0, required=False)


class SubmitScoreForm(forms.Form):
    quiz_id = forms.IntegerField(min_value=1)
    total_time_spent = forms.IntegerField(min_value=0, required=False)


def clean_answers(items):
    """
    Zvaliduje seznam ``answers`` při odeslání výsledku.

    Returns:
        Dvojice slovníků: id otázky -> vybrané indexy a
        id otázky -> strávené sekundy (jen kde byly zadané).

    Raises:
        ValidationFailed: s chybami polí pro každou položku podle pozice.
    """
    if not isinstance(items, list):
        raise ValidationFailed(details={"answers": [{"message": "Enter a list of answers.", "code": "invalid"}]})
    answers, times, errors = {}, {}, {}
    for position, item in enumerate(items):
        form = AnswerForm(data=item if isinstance(item, dict) else {})
        if not form.is_valid():
            errors[str(position)] = form.errors.get_json_data()
            continue
        question_id = form.cleaned_data["question_id"]
        answers[question_id] = form.cleaned_data["selected_indices"]
        if form.cleaned_data["time_spent"] is not None:
            times[question_id] = form.cleaned_data["time_spent"]
    if errors:
        raise ValidationFailed(details={"answers": errors})
    return answers, times


# ===== TVORBA KVÍZŮ =====

class QuestionForm(forms.Form):
    """Pravidla otázky pro koncept: vše může být ještě nedokončené."""
    content = forms.CharField(max_length=1000, required=False)
    options = StringListField(max_length=MAX_OPTIONS, required=False)
    correct_indices = IndexListField(required=False)
    is_multiple_choice = forms.BooleanField(required=False)
    explanation = forms.CharField(max_length=2000, required=False)
    image_url = forms.URLField(required=False)
    points = forms.IntegerField(min_value=1, max_value=100, required=False)

    def clean_points(self):
        return self.cleaned_data["points"] or 10


class PublishedQuestionForm(QuestionForm):
    """Pravidla otázky pro zveřejnění: kompletní, správné odpovědi v rozsahu."""
    content = forms.CharField(min_length=1, max_length=1000)
    options = StringListField(min_length=MIN_OPTIONS, max_length=MAX_OPTIONS, allow_blank_items=False)
    correct_indices = IndexListField(min_length=1)

    def clean(self):
        cleaned = super().clean()
        options = cleaned.get("options")
        correct = cleaned.get("correct_indices")
        if options is None or correct is None:
            return cleaned
        if any(index >= len(options) for index in correct):
            self.add_error("correct_indices", "Correct answers must refer to existing options.")
        elif not cleaned.get("is_multiple_choice") and len(set(correct)) != 1:
            self.add_error("correct_indices", "Single-choice questions need exactly one correct answer.")
        return cleaned


class QuizForm(forms.Form):
    """Pravidla kvízu pro koncept."""
    title = forms.CharField(min_length=1, max_length=100)
    description = forms.CharField(max_length=1000, required=False)
    category_id = forms.ModelChoiceField(queryset=Category.objects.all(), required=False)
    tags = StringListField(max_length=10, allow_blank_items=False, max_item_length=50, required=False)
    is_public = forms.BooleanField(required=False)
    time_limit = forms.IntegerField(min_value=30, max_value=7200, required=False)
    passing_score = forms.IntegerField(min_value=0, max_value=100, required=False)
    status = forms.ChoiceField(choices=Quiz.Status.choices)

    def clean_passing_score(self):
        value = self.cleaned_data["passing_score"]
        return 60 if value is None else value


class PublishQuizForm(QuizForm):
    """Pravidla kvízu pro zveřejnění."""
    title = forms.CharField(min_length=3, max_length=100)
    category_id = forms.ModelChoiceField(queryset=Category.objects.all())


def clean_quiz_payload(data):
    """
    Zvaliduje celý kvíz včetně otázek.

    Koncepty používají mírnější formuláře, zveřejňované kvízy přísné; výběr
    určuje klíč ``status``. Chybějící ``is_public`` znamená True.

    Returns:
        Dvojice vyčištěných polí kvízu a seznamu vyčištěných otázek.

    Raises:
        ValidationFailed: s chybami polí; chyby otázek jsou vnořené pod
            ``questions`` podle pozice.
    """
    data = dict(data)
    data.setdefault("is_public", True)
    publishing = data.get("status") == Quiz.Status.PUBLISHED
    quiz_form = (PublishQuizForm if publishing else QuizForm)(data=data)
    question_form_class = PublishedQuestionForm if publishing else QuestionForm

    errors = {}
    if not quiz_form.is_valid():
        errors.update(quiz_form.errors.get_json_data())

    raw_questions = data.get("questions", [])
    questions = []
    if not isinstance(raw_questions, list):
        errors["questions"] = [{"message": "Enter a list of questions.", "code": "invalid"}]
    else:
        question_errors = {}
        for position, raw in enumerate(raw_questions):
            form = question_form_class(data=raw if isinstance(raw, dict) else {})
            if form.is_valid():
                questions.append(form.cleaned_data)
            else:
                question_errors[str(position)] = form.errors.get_json_data()
        if question_errors:
            errors["questions"] = question_errors
        elif publishing and not raw_questions:
            errors["questions"] = [{"message": "Add at least one question.", "code": "min_length"}]

    if errors:
        raise ValidationFailed(details=errors)
    return quiz_form.cleaned_data, questions


# ===== SOCIÁLNÍ FUNKCE =====

class LikeForm(forms.Form):
    quiz_id = forms.IntegerField(min_value=1)


class CommentForm(forms.Form):
    quiz_id = forms.IntegerField(min_value=1)
    question_id = forms.IntegerField(min_value=1, required=False)
    parent_id = forms.IntegerField(min_value=1, required=False)
    content = forms.CharField(min_length=1, max_length=2000)


class CommentUpdateForm(forms.ModelForm):
    class Meta:
        model = Comment
        fields = ["content"]
