"""
Personality records, defaults and normalization.

Normalization is where id uniqueness is enforced; the rewriting core only
looks personalities up by id.
"""

import logging
import random
import re
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_MAIN_PROMPT = (
    "Rewrite webpage copy to match the given personality while keeping the same meaning and length."
)


class Personality(BaseModel):
    """A named prompt fragment controlling the rewritten tone."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    prompt: str


DEFAULT_PERSONALITIES: List[Personality] = [
    Personality(
        id="funny-pirate",
        name="Funny Pirate",
        prompt=(
            "Talk like a swashbuckling pirate who finds everything hilarious. Use nautical "
            'metaphors, say "arrr" and "matey", and sneak in puns about the sea.'
        ),
    ),
    Personality(
        id="concerned-parent",
        name="Concerned Parent",
        prompt=(
            "Sound like a loving but slightly overprotective parent. Add gentle warnings, "
            'caring reminders, and phrases like "be careful" and "have you eaten?".'
        ),
    ),
    Personality(
        id="noir-detective",
        name="Noir Detective",
        prompt=(
            "Write like a hard-boiled 1940s detective narrating a case. Use moody metaphors, "
            "short punchy sentences, and a world-weary cynical tone."
        ),
    ),
    Personality(
        id="surfer-dude",
        name="Surfer Dude",
        prompt=(
            'Talk like a laid-back California surfer. Everything is "rad", "gnarly", or '
            '"stoked". Keep it super chill and positive, dude.'
        ),
    ),
    Personality(
        id="shakespearean-bard",
        name="Shakespearean Bard",
        prompt=(
            'Rewrite in the style of William Shakespeare. Use "thee", "thou", "doth", and '
            "iambic phrasing. Be dramatic and poetic."
        ),
    ),
]

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    slug = _NON_SLUG_RE.sub("-", value.lower()).strip("-")
    return slug or "personality"


def unique_id_from_name(name: str, personalities: Iterable[Personality]) -> str:
    """Slug of ``name``, with a random numeric suffix when the slug is taken."""
    base = slugify(name)
    ids = {item.id for item in personalities}

    if base not in ids:
        return base

    candidate = f"{base}-{random.randint(0, 99999)}"
    while candidate in ids:
        candidate = f"{base}-{random.randint(0, 99999)}"
    return candidate


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_personalities(entries: Any) -> List[Personality]:
    """
    Turn untrusted input into a valid, de-duplicated personality list.

    Entries without a non-empty name and prompt are dropped, ids are slugified
    (falling back to the name), and the first entry wins on duplicate ids.
    Never returns an empty list: defaults are substituted instead.
    """
    if not isinstance(entries, list):
        return list(DEFAULT_PERSONALITIES)

    normalized: List[Personality] = []
    seen = set()

    for entry in entries:
        if isinstance(entry, Personality):
            entry = entry.model_dump()
        if not isinstance(entry, dict):
            continue

        name = _clean(entry.get("name"))
        prompt = _clean(entry.get("prompt"))
        if not name or not prompt:
            continue

        personality_id = slugify(_clean(entry.get("id")) or name)
        if personality_id in seen:
            continue

        seen.add(personality_id)
        normalized.append(Personality(id=personality_id, name=name, prompt=prompt))

    return normalized or list(DEFAULT_PERSONALITIES)


def select_personality(
    personalities: Sequence[Personality],
    personality_id: Optional[str],
) -> Personality:
    """
    Pick the personality requested by id.

    An unknown or missing id falls back to the first configured personality;
    unknown ids are logged so selection mistakes stay visible.
    """
    if personality_id:
        for item in personalities:
            if item.id == personality_id:
                return item
        logger.warning(
            f"Unknown personality '{personality_id}', falling back to '{personalities[0].id}'",
            extra={"requested": personality_id, "fallback": personalities[0].id},
        )
    return personalities[0]
