"""
Per-field validation for the onboarding steps.

Each validator returns the cleaned value or raises OnboardingValidationError
carrying the title/message pair the screen shows. Nothing here touches the
profile store.
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from app.modules.onboarding.catalog import (
    AVAILABILITY_DAYS,
    EARLIEST_BIRTH_YEAR,
    GENDERS,
    HEIGHT_OPTIONS,
    LOOKING_FOR_OPTIONS,
    MAX_ANSWER_LENGTH,
    MAX_BIO_LENGTH,
    MAX_LOOKING_FOR,
    MAX_PROMPTS,
    MIN_PROMPTS,
    MINIMUM_AGE,
    PREDEFINED_PROMPTS,
    HeightOption,
)

DatePart = Union[int, str]


class OnboardingValidationError(ValueError):
    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message


def validate_name(first_name: str, last_name: Optional[str] = None) -> Tuple[str, Optional[str]]:
    first = (first_name or "").strip()
    if not first:
        raise OnboardingValidationError("Required", "First name is required.")
    last = (last_name or "").strip()
    return first, last or None


def _to_int(part: DatePart) -> Optional[int]:
    if isinstance(part, int):
        return part
    try:
        return int(str(part).strip())
    except ValueError:
        return None


def parse_birth_date(day: DatePart, month: DatePart, year: DatePart, today: Optional[date] = None) -> date:
    """Build a real calendar date from the three input boxes."""
    today = today or date.today()
    d, m, y = _to_int(day), _to_int(month), _to_int(year)
    invalid = OnboardingValidationError("Invalid Date", "Please enter a valid date of birth.")
    if d is None or m is None or y is None:
        raise invalid
    if y < EARLIEST_BIRTH_YEAR or y > today.year:
        raise invalid
    try:
        return date(y, m, d)
    except ValueError:
        raise invalid


def calculate_age(birth_date: date, on: Optional[date] = None) -> int:
    """Whole years elapsed, counting the birthday itself as complete."""
    on = on or date.today()
    before_birthday = (on.month, on.day) < (birth_date.month, birth_date.day)
    return on.year - birth_date.year - int(before_birthday)


def validate_birth_date(
    day: DatePart, month: DatePart, year: DatePart, today: Optional[date] = None
) -> Tuple[date, int]:
    today = today or date.today()
    birth_date = parse_birth_date(day, month, year, today)
    age = calculate_age(birth_date, today)
    if age < MINIMUM_AGE:
        raise OnboardingValidationError(
            f"Must be {MINIMUM_AGE} or above",
            f"You must be at least {MINIMUM_AGE} years old to use LinkUp.",
        )
    return birth_date, age


def validate_gender(gender: Optional[str]) -> str:
    if gender not in GENDERS:
        raise OnboardingValidationError("Required", "Please select your gender.")
    return gender


def _unique(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return seen


def validate_looking_for(options: Sequence[str]) -> List[str]:
    selected = _unique(options or [])
    unknown = [o for o in selected if o not in LOOKING_FOR_OPTIONS]
    if unknown:
        raise OnboardingValidationError("Invalid selection", f"Unknown option: {', '.join(unknown)}")
    if not selected:
        raise OnboardingValidationError("Required", "Please choose what you're looking for.")
    if len(selected) > MAX_LOOKING_FOR:
        raise OnboardingValidationError("Too many", f"You can choose up to {MAX_LOOKING_FOR} options.")
    return selected


def validate_interested_in(genders: Sequence[str]) -> List[str]:
    selected = _unique(genders or [])
    if not selected or any(g not in GENDERS for g in selected):
        raise OnboardingValidationError("Required", "Please choose who you're interested in.")
    return selected


def validate_height(total_inches: Optional[int]) -> HeightOption:
    for option in HEIGHT_OPTIONS:
        if option.total_inches == total_inches:
            return option
    raise OnboardingValidationError("Required", "Please select your height.")


def availability_from_day(day_index: Optional[int]) -> List[bool]:
    """Eight flags starting today with only the chosen day set."""
    if day_index is None or not 0 <= day_index < AVAILABILITY_DAYS:
        raise OnboardingValidationError(
            "Selection Required", "Please select a day when you're available to meet."
        )
    flags = [False] * AVAILABILITY_DAYS
    flags[day_index] = True
    return flags


def validate_prompt(question: str, answer: str) -> Tuple[str, str]:
    question = (question or "").strip()
    answer = (answer or "").strip()
    if question not in PREDEFINED_PROMPTS:
        raise OnboardingValidationError("Invalid prompt", "Please pick a prompt from the list.")
    if not answer:
        raise OnboardingValidationError("Required", "Please write an answer.")
    if len(answer) > MAX_ANSWER_LENGTH:
        raise OnboardingValidationError("Too long", f"Answers are limited to {MAX_ANSWER_LENGTH} characters.")
    return question, answer


def validate_prompt_set(questions: Sequence[str]) -> None:
    if len(questions) < MIN_PROMPTS:
        raise OnboardingValidationError("Required", "Please add a prompt.")
    if len(questions) > MAX_PROMPTS:
        raise OnboardingValidationError("Too many", f"Maximum {MAX_PROMPTS} prompts allowed.")
    if len(set(questions)) != len(questions):
        raise OnboardingValidationError("Duplicate prompt", "Each prompt question can only be used once.")


def validate_bio(bio: Optional[str]) -> str:
    bio = (bio or "").strip()
    if not bio:
        raise OnboardingValidationError("Required", "Please enter your bio.")
    if len(bio) > MAX_BIO_LENGTH:
        raise OnboardingValidationError("Too long", f"Bio is limited to {MAX_BIO_LENGTH} characters.")
    return bio
