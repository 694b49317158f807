"""Field-level validation for decoded Forms.

Decoding only checks structure; a Form that decodes cleanly can still break
the limits enforced here (string lengths, list sizes, scale steps, URLs).
Callers run `validate_form` as a separate step before sending a form out.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple
from urllib.parse import urlsplit

from formwire.errors import FormValidationError
from formwire.models.fields import Field, Form, MultipleChoice, OpinionScale

Problem = Tuple[str, str]

MAX_TITLE = 256
MAX_FIELDS = 500
MAX_QUESTION = 512
MAX_REF = 128
MAX_DESCRIPTION = 512
MAX_TAGS = 100
MAX_TAG = 128
MIN_STEPS, MAX_STEPS = 5, 11
MAX_LABEL = 100
MIN_CHOICES, MAX_CHOICES = 1, 25
MAX_CHOICE_LABEL = 512


def _url_problem(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return "unsupported type for url"
    if value == "":
        return None
    try:
        parts = urlsplit(value)
    except ValueError as exc:
        return str(exc)
    if not parts.scheme:
        return "missing scheme in url"
    if not parts.netloc:
        return "missing host in url"
    return None


def validate_url(value: Any) -> None:
    """Raise FormValidationError unless `value` is empty or an absolute URL."""
    problem = _url_problem(value)
    if problem:
        raise FormValidationError([("url", problem)])


def _check_len(problems: List[Problem], path: str, value: str, *, maximum: int, minimum: int = 0) -> None:
    if len(value) < minimum:
        problems.append((path, "must not be empty" if minimum == 1 else f"shorter than {minimum}"))
    if len(value) > maximum:
        problems.append((path, f"longer than {maximum}"))


def _check_tags(problems: List[Problem], path: str, tags: List[str]) -> None:
    if len(tags) > MAX_TAGS:
        problems.append((path, f"more than {MAX_TAGS} tags"))
    for i, tag in enumerate(tags):
        _check_len(problems, f"{path}[{i}]", tag, minimum=1, maximum=MAX_TAG)


def _field_problems(field: Field, path: str) -> List[Problem]:
    problems: List[Problem] = []
    _check_len(problems, f"{path}.question", field.question, minimum=1, maximum=MAX_QUESTION)
    _check_len(problems, f"{path}.ref", field.ref, maximum=MAX_REF)
    _check_len(problems, f"{path}.description", field.description, maximum=MAX_DESCRIPTION)
    _check_tags(problems, f"{path}.tags", field.tags)

    if isinstance(field, OpinionScale):
        if not MIN_STEPS <= field.steps <= MAX_STEPS:
            problems.append((f"{path}.steps", f"must be between {MIN_STEPS} and {MAX_STEPS}"))
        for side in ("left", "center", "right"):
            _check_len(problems, f"{path}.labels.{side}", getattr(field.labels, side), maximum=MAX_LABEL)
    elif isinstance(field, MultipleChoice):
        if not MIN_CHOICES <= len(field.choices) <= MAX_CHOICES:
            problems.append((f"{path}.choices", f"must have between {MIN_CHOICES} and {MAX_CHOICES} choices"))
        for i, choice in enumerate(field.choices):
            _check_len(problems, f"{path}.choices[{i}].label", choice.label, minimum=1, maximum=MAX_CHOICE_LABEL)
    return problems


def form_problems(form: Form) -> List[Problem]:
    problems: List[Problem] = []
    _check_len(problems, "title", form.title, minimum=1, maximum=MAX_TITLE)
    _check_tags(problems, "tags", form.tags)
    url_problem = _url_problem(form.webhook_url)
    if url_problem:
        problems.append(("webhook_url", url_problem))
    if not 1 <= len(form.fields) <= MAX_FIELDS:
        problems.append(("fields", f"must have between 1 and {MAX_FIELDS} fields"))
    for i, field in enumerate(form.fields):
        problems.extend(_field_problems(field, f"fields[{i}]"))
    return problems


def validate_form(form: Form) -> None:
    """Raise FormValidationError listing every rule the form breaks."""
    problems = form_problems(form)
    if problems:
        raise FormValidationError(problems)


__all__ = ["validate_url", "form_problems", "validate_form"]
