"""
Speech pattern catalogue.

Static table of named pattern groups. Every analyzer iterates these groups
the same way through PatternGroup.find_all, so adding a marker means adding
a regex here and nowhere else.
"""
import re
from dataclasses import dataclass
from typing import List, Pattern, Tuple

from .text_stats import split_sentences

I = re.IGNORECASE


@dataclass(frozen=True)
class PatternGroup:
    """
    A named list of compiled regexes.

    sentence_start groups are matched against the start of each sentence
    instead of anywhere in the text. Matches of case-insensitive patterns
    are lowercased so that "Okay so" and "okay so" count as one phrase.
    """
    name: str
    patterns: Tuple[Pattern, ...]
    context: str = "General usage"
    sentence_start: bool = False

    def find_all(self, text: str) -> List[str]:
        """Every match of every pattern, in catalogue order."""
        targets = split_sentences(text) if self.sentence_start else [text]
        matches: List[str] = []
        for pattern in self.patterns:
            for target in targets:
                for match in pattern.finditer(target):
                    found = match.group(0).strip()
                    if not found:
                        continue
                    matches.append(found.lower() if pattern.flags & I else found)
        return matches

    def count(self, text: str) -> int:
        return len(self.find_all(text))


def _group(name: str, *patterns: Pattern, context: str = "General usage",
           sentence_start: bool = False) -> PatternGroup:
    return PatternGroup(name=name, patterns=tuple(patterns), context=context,
                        sentence_start=sentence_start)


# ═══════════════════════════════════════════════════════════════════════════════
# SPEECH PATTERN GROUPS
# ═══════════════════════════════════════════════════════════════════════════════

OPENING_HOOKS = _group(
    "Primary Hook",
    re.compile(r"^(listen up|okay so|here's the thing|check this out|wait for it|hold up)", I),
    re.compile(r"^(guys|everyone|people|listen|hey)\b", I),
    re.compile(r"^(you know what|let me tell you|i just realized|here's what)", I),
    context="Video openings and attention grabbers",
    sentence_start=True,
)

QUESTION_HOOKS = _group(
    "Question Pattern",
    re.compile(r"(right\?|you know\?|don't you think\?|am i right\?)", I),
    re.compile(r"(have you ever|did you know|can you believe)", I),
    context="Audience interaction and confirmation",
)

BRIDGES = _group(
    "Bridge Phrase",
    re.compile(r"(which means|basically|so here's the thing|the point is)", I),
    re.compile(r"(in other words|what i'm saying is|long story short)", I),
    re.compile(r"(but here's the kicker|but wait|but seriously)", I),
    context="Transitions between topics",
)

ENERGY_ESCALATORS = _group(
    "Energy Escalator",
    re.compile(r"(THIS is|THAT'S|OH MY GOD|BOOM|BAM|WAIT)", I),
    re.compile(r"\b[A-Z]{2,}\b"),
    re.compile(r"(!!!|!!\s)"),
    context="Peak moments and emphasis",
)

PERSONAL_REFERENCES = _group(
    "Personal Reference",
    re.compile(r"(i think|in my opinion|my experience|i believe|i feel)", I),
    re.compile(r"(when i was|i remember|i used to|i always)", I),
    context="Storytelling and credibility",
)

AUDIENCE_ADDRESS = _group(
    "Audience Address",
    re.compile(r"(you guys|you need to|you should|you have to|you can)", I),
    re.compile(r"(let me ask you|think about it|imagine this)", I),
    context="Direct engagement",
)

FILLERS = _group(
    "Filler",
    re.compile(r"\b(um|uh|like|you know|so|well|actually)\b", I),
    re.compile(r"\b(obviously|literally|basically|honestly)\b", I),
)

# ═══════════════════════════════════════════════════════════════════════════════
# EMOTIONAL STATE MARKERS
# ═══════════════════════════════════════════════════════════════════════════════

EXCITED_MARKERS = _group(
    "Excited",
    re.compile(r"\b(amazing|incredible|unbelievable|wow|omg|crazy)\b", I),
    re.compile(r"!{2,}"),
    re.compile(r"\b[A-Z]{3,}\b"),
)

EXPLAINING_MARKERS = _group(
    "Explaining",
    re.compile(r"\b(first|second|third|next|then|finally)\b", I),
    re.compile(r"\b(because|since|due to|as a result)\b", I),
)

# Order defines the pattern mapping matrix
MATRIX_GROUPS = (
    ("primary_hook", OPENING_HOOKS),
    ("bridge_phrase", BRIDGES),
    ("energy_escalator", ENERGY_ESCALATORS),
    ("personal_reference", PERSONAL_REFERENCES),
    ("audience_address", AUDIENCE_ADDRESS),
    ("question_pattern", QUESTION_HOOKS),
)

# Words ignored when mining phrases and catchphrases
PHRASE_STOPWORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "is", "are", "was", "were",
])
