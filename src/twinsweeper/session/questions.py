"""
Questions shown when a player opens a question tile.

The session hands a Question to the registered presenter and receives
back whether the players answered it correctly.
"""
import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Question:
    """
    A multiple choice question.

    Attributes:
        text: The question itself.
        options: Possible answers, in display order.
        answer_index: Index of the correct option.
    """

    text: str
    options: Tuple[str, ...]
    answer_index: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if len(self.options) < 2:
            raise ValueError("A question needs at least two options")
        if not 0 <= self.answer_index < len(self.options):
            raise ValueError("answer_index out of range")

    @property
    def answer(self) -> str:
        return self.options[self.answer_index]

    def is_correct(self, choice: int) -> bool:
        """Check an option index chosen by the players."""
        return choice == self.answer_index


# Called mid-reveal; returns True when the players answered correctly.
QuestionPresenter = Callable[[Question], bool]


DEFAULT_QUESTIONS: Tuple[Question, ...] = (
    Question("How many neighbours does an interior grid cell have?",
             ("4", "6", "8", "9"), 2),
    Question("Which data structure gives first-in, first-out order?",
             ("Stack", "Queue", "Heap", "Tree"), 1),
    Question("What is 2 to the power of 10?",
             ("512", "1000", "1024", "2048"), 2),
    Question("Which of these is not a prime number?",
             ("2", "17", "21", "29"), 2),
    Question("What does the 'H' in HTTP stand for?",
             ("Hyper", "High", "Host", "Hash"), 0),
    Question("Which planet is closest to the sun?",
             ("Venus", "Mercury", "Mars", "Earth"), 1),
    Question("How many bits are in a byte?",
             ("4", "8", "16", "32"), 1),
    Question("Which search visits nodes level by level?",
             ("Depth-first", "Breadth-first", "Binary", "Linear"), 1),
    Question("What is the binary representation of 5?",
             ("101", "110", "111", "011"), 0),
    Question("Which shape has exactly three sides?",
             ("Square", "Pentagon", "Triangle", "Hexagon"), 2),
)


class QuestionBank:
    """
    Deck of questions drawn in shuffled order.

    Questions do not repeat until the whole deck has been used, after
    which it is reshuffled.
    """

    def __init__(
        self,
        questions: Sequence[Question] = DEFAULT_QUESTIONS,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not questions:
            raise ValueError("Question bank cannot be empty")
        self._questions: List[Question] = list(questions)
        self._rng = rng or random.Random()
        self._deck: List[Question] = []

    def __len__(self) -> int:
        return len(self._questions)

    def draw(self) -> Question:
        """Take the next question from the deck."""
        if not self._deck:
            self._deck = list(self._questions)
            self._rng.shuffle(self._deck)
        return self._deck.pop()

    @classmethod
    def from_json(
        cls, path: Union[str, Path], rng: Optional[random.Random] = None
    ) -> "QuestionBank":
        """
        Load a deck from a JSON file.

        The file holds a list of objects with ``text``, ``options`` and
        ``answer`` (the index of the correct option).
        """
        with open(path, "r") as f:
            raw = json.load(f)
        questions = [
            Question(item["text"], tuple(item["options"]), int(item["answer"]))
            for item in raw
        ]
        return cls(questions, rng=rng)
