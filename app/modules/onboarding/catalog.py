"""Fixed option catalogs shared by the onboarding screens and the API."""

from dataclasses import dataclass
from typing import List

GENDERS = ("MALE", "FEMALE", "OTHER")

LOOKING_FOR_OPTIONS = {
    "RELATIONSHIP": "Relationship",
    "CASUAL_DATES": "Casual Dates",
    "PARTY_PARTNER": "Party Partner",
    "FRIENDS": "Friends",
    "HANGOUTS": "Hangouts",
    "WATCH_MOVIE": "Watch Movie",
    "EXPLORING_CITY_AND_CAFE": "Exploring City & Cafe",
    "TIME_SPENDING": "Time Spending",
    "FINDING_OUT": "Finding Out",
}
MAX_LOOKING_FOR = 3

PREDEFINED_PROMPTS = (
    "A non-negotiable for me is",
    "Simple pleasures",
    "Typical Sunday",
    "I'm looking for",
    "My simple pleasures",
    "A random fact I love",
    "I geek out on",
    "Two truths and a lie",
    "Believe it or not, I",
    "Best travel story",
    "Dating me is like",
    "I want someone who",
    "My most controversial opinion is",
    "The way to win me over is",
    "Biggest risk I've taken",
)
MIN_PROMPTS = 1
MAX_PROMPTS = 3
MAX_ANSWER_LENGTH = 150
MAX_BIO_LENGTH = 500

MIN_PHOTOS = 2
MAX_PHOTOS = 6

AVAILABILITY_DAYS = 8
MINIMUM_AGE = 18
EARLIEST_BIRTH_YEAR = 1900


@dataclass(frozen=True)
class HeightOption:
    total_inches: int

    @property
    def feet(self) -> int:
        return self.total_inches // 12

    @property
    def inches(self) -> int:
        return self.total_inches % 12

    @property
    def label(self) -> str:
        return f"{self.feet}'{self.inches}\""

    @property
    def stored_value(self) -> str:
        return f"{self.feet} {self.inches}"


# 3'0" through 8'0"
HEIGHT_OPTIONS: List[HeightOption] = [HeightOption(36 + i) for i in range(61)]
