"""Word validity lookup and length-based scoring."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3

# Built-in corpus for development; production deployments point
# TRIWORD_WORDLIST_PATH at a full word list.
DEFAULT_WORDS = frozenset(
    """
    ACE ACT ADD AGE AIR ALL AND ANY ARM ART ASK BAD BAG BAR BED BET BIG BIT BOX
    BOY BUG BUY CAR CAT CUP CUT DAY DID DIE DOG DRY DUE EAR EAT EGG END EYE FAR
    FEW FIT FLY FOR GET GOT GUN HAD HAS HAT HER HIM HIS HIT HOT HOW ICE ITS JOB
    KEY LAW LAY LED LEG LET LIE LOT LOW MAN MAP MAY MEN MET MIX NET NEW NOT NOW
    OFF OIL OLD ONE OUR OUT OWN PAY PEN PUT RAN RUN SAT SAW SAY SEA SEE SET SHE
    SIT SIX SKY SON SUN TEN THE TOO TOP TRY TWO USE WAR WAS WAY WHO WHY WIN YES
    YET YOU ABOUT ABOVE ACTOR AFTER AGAIN APPLE BEACH BOARD BRAIN BRAVE BREAD
    BREAK BUILD CHART CHILD CLEAN CLEAR CLOCK CLOUD COLOR DANCE DREAM DRINK
    DRIVE EARTH EIGHT EVERY FIELD FIGHT FIRST FLOOR FOCUS FORCE FRESH FRONT
    FRUIT GLASS GRADE GRAND GRASS GREAT GREEN HAPPY HEART HEAVY HOUSE HUMAN
    LARGE LEARN LEVEL LIGHT LUCKY MAGIC MAJOR METAL MONEY MOUSE MUSIC NIGHT
    NORTH OCEAN PAINT PAPER PARTY PEACE PHONE PLANE PLANT PLATE POINT POWER
    PRICE PRIDE PRIZE QUEEN QUIET RADIO RANGE RATIO REACH READY RIGHT RIVER
    ROUND ROYAL SCALE SCOPE SCORE SENSE SERVE SHAPE SHARE SHARP SHEEP SHINE
    SHIRT SHOCK SHORE SHORT SIGHT SKILL SLEEP SMART SMILE SMOKE SOLID SOUND
    SOUTH SPACE SPEED SPORT STAFF STAGE STAND START STATE STEAM STEEL STICK
    STILL STOCK STONE STORE STORM STORY SWEET TABLE TASTE THEME THERE THICK
    THING THINK THIRD THREE THROW TIGER TIGHT TITLE TODAY TOTAL TOUCH TOWER
    TRACK TRADE TRAIN TREND TRIAL TRUST TRUTH UNCLE UNDER UNION UNITY VALUE
    VIDEO VISIT VOICE WASTE WATCH WATER WHERE WHICH WHITE WHOLE WHOSE WOMAN
    WORLD WORTH WOULD WRITE WRONG YOUNG
    """.split()
)

# Points by word length; anything longer than the last entry scores 12.
_LENGTH_POINTS = {1: 1, 2: 1, 3: 1, 4: 2, 5: 4, 6: 6, 7: 9}
_LONG_WORD_POINTS = 12


class Lexicon:
    """Case-insensitive word lookup over a fixed corpus."""

    def __init__(self, words: Iterable[str] | None = None) -> None:
        source = DEFAULT_WORDS if words is None else words
        self._words = frozenset(word.strip().upper() for word in source if word.strip())

    @classmethod
    def from_file(cls, path: str | Path) -> "Lexicon":
        """Load a newline-separated word list, skipping blanks and ``#`` comments."""
        lines = Path(path).read_text(encoding="utf-8").splitlines()
        words = [line for line in lines if line.strip() and not line.lstrip().startswith("#")]
        logger.info("Loaded %s words from %s", len(words), path)
        return cls(words)

    def __len__(self) -> int:
        return len(self._words)

    def is_valid(self, word: str) -> bool:
        if len(word) < MIN_WORD_LENGTH:
            return False
        return word.upper() in self._words

    def score(self, word: str) -> int:
        if not word:
            raise ValueError("cannot score an empty word")
        return _LENGTH_POINTS.get(len(word), _LONG_WORD_POINTS)


def load_lexicon(wordlist_path: str | None) -> Lexicon:
    if wordlist_path:
        return Lexicon.from_file(wordlist_path)
    return Lexicon()
