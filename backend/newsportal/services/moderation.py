"""Comment auto-moderation.

Decides the initial ``is_approved`` flag of a comment from its text alone.
A comment is held for staff review when it contains a blocked word, shares a
link, is too short, or carries a long unbroken alphanumeric run (typical of
bot-generated strings). The policy is a heuristic: false positives and false
negatives are accepted, and held comments are released by a moderator.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable

from newsportal.config import settings

logger = logging.getLogger(__name__)

LINK_MARKERS = ("http://", "https://")


@dataclass
class ModerationResult:
    approved: bool
    reasons: list[str] = field(default_factory=list)


class ModerationPolicy:
    """Denylist plus spam heuristics, configured per deployment."""

    def __init__(self, blocked_words: Iterable[str], min_length: int = 5, max_alnum_run: int = 30):
        self.blocked_words = tuple(w.lower() for w in blocked_words if w)
        self.min_length = min_length
        self.max_alnum_run = max_alnum_run
        # [^\W_] is a letter or digit in any script
        self._alnum_run = re.compile(r"[^\W_]{%d,}" % max_alnum_run)

    def evaluate(self, content: str) -> ModerationResult:
        """Classify ``content`` and collect the reasons it was held, if any."""
        text_lower = content.lower()
        reasons = []

        if any(word in text_lower for word in self.blocked_words):
            reasons.append("blocked_word")
        if any(marker in text_lower for marker in LINK_MARKERS):
            reasons.append("link")
        if len(content) < self.min_length:
            reasons.append("too_short")
        if self._alnum_run.search(text_lower):
            reasons.append("alnum_run")

        if reasons:
            logger.info("Comment held for moderation: %s", ", ".join(reasons))
        return ModerationResult(approved=not reasons, reasons=reasons)

    def is_approved(self, content: str) -> bool:
        return self.evaluate(content).approved


def policy_from_settings(config) -> ModerationPolicy:
    """Build the deployment policy from the MODERATION_* settings."""
    return ModerationPolicy(
        blocked_words=config.MODERATION_BLOCKED_WORDS,
        min_length=config.MODERATION_MIN_LENGTH,
        max_alnum_run=config.MODERATION_MAX_ALNUM_RUN,
    )


@lru_cache
def get_moderation_policy() -> ModerationPolicy:
    """FastAPI dependency returning the configured policy."""
    return policy_from_settings(settings)
