# services/prompts.py
import math
import random
from typing import Optional

from app.config import WORDS_PER_SECOND_BUDGET
from app.state import ResultsSink, Session, SessionSettings

# common English words, short enough to keep the focus on rhythm
WORDS = (
    "the be to of and a in that have it for not on with he as you do at "
    "this but his by from they we say her she or an will my one all would "
    "there their what so up out if about who get which go me when make can "
    "like time no just him know take people into year your good some could "
    "them see other than then now look only come its over think also back "
    "after use two how our work first well way even new want because any "
    "these give day most us is was are were been has had did said each "
    "tell very long own find here thing many place same right still "
    "hand high keep last let might must never old point small such turn "
    "under world where while why around before between both down end few "
    "great group home house large life little man number off open part "
    "play put run seem show side since start state three through too try "
    "again against ask call case child company country different early eye "
    "fact feel government important leave less line mean move need next "
    "person problem program public question school should system "
    "week woman word write young head light water form set order"
).split()


def generate_prompt(number_of_words: int, rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return " ".join(rng.choice(WORDS) for _ in range(number_of_words))


def words_for_duration(number_of_secs: float) -> int:
    """Word count a timed prompt needs so that nobody runs out of text."""
    return max(1, int(math.ceil(number_of_secs * WORDS_PER_SECOND_BUDGET)))


def build_session(
    settings: SessionSettings,
    results_log: Optional[ResultsSink] = None,
    rng: Optional[random.Random] = None,
) -> Session:
    if settings.prompt:
        prompt = settings.prompt
    else:
        prompt = generate_prompt(settings.number_of_words, rng)
    return Session.from_settings(settings, prompt, results_log=results_log)
