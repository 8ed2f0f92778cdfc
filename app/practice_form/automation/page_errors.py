from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

from ..errors import UnexpectedPageError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenignErrorRule:
    name: str
    reason: str
    message_pattern: Optional[Pattern[str]] = None
    stack_pattern: Optional[Pattern[str]] = None

    def matches(self, message: str, stack: str) -> bool:
        if self.message_pattern is None and self.stack_pattern is None:
            return False
        if self.message_pattern is not None and not self.message_pattern.search(message):
            return False
        if self.stack_pattern is not None and not self.stack_pattern.search(stack):
            return False
        return True


BENIGN_ERRORS: Tuple[BenignErrorRule, ...] = (
    BenignErrorRule(
        name="cross-origin-script-error",
        reason="third-party script failed cross-origin; the browser hides the details",
        message_pattern=re.compile(r"Script error\.?", re.IGNORECASE),
    ),
    BenignErrorRule(
        name="adplus-setup",
        reason="ad.plus loader calls setup before it is defined",
        message_pattern=re.compile(r"setup is not a function", re.IGNORECASE),
        stack_pattern=re.compile(r"adplus", re.IGNORECASE),
    ),
)


def match_benign(
    message: str, stack: str = "", rules: Sequence[BenignErrorRule] = BENIGN_ERRORS
) -> Optional[BenignErrorRule]:
    for rule in rules:
        if rule.matches(message or "", stack or ""):
            return rule
    return None


class PageErrorGuard:
    """Collects uncaught in-page errors, ignoring the allow-listed ones."""

    def __init__(self, rules: Sequence[BenignErrorRule] = BENIGN_ERRORS) -> None:
        self.rules = tuple(rules)
        self.ignored: List[Tuple[str, str]] = []
        self.unexpected: List[str] = []

    def record(self, message: str, stack: str = "") -> bool:
        rule = match_benign(message, stack, self.rules)
        if rule is not None:
            LOGGER.debug("Ignoring in-page error (%s): %s", rule.name, message)
            self.ignored.append((rule.name, message))
            return False
        LOGGER.warning("Unexpected in-page error: %s", message)
        self.unexpected.append(message)
        return True

    def on_page_error(self, error) -> None:
        self.record(getattr(error, "message", str(error)), getattr(error, "stack", "") or "")

    def raise_for_errors(self) -> None:
        if self.unexpected:
            raise UnexpectedPageError(self.unexpected)
