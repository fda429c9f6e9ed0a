"""
Response Grammar

Vendor responses are free-form text. Each vendor parser is an ordered list
of named, versioned rules; the first rule whose guard passes and whose
pattern matches builds the Outcome. Adding a new vendor response variant
means adding a rule, nothing else.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable

from messaging_sms.contracts.outcome import Outcome
from messaging_sms.contracts.payloads import Gateway

logger = logging.getLogger(__name__)

# Builds an outcome from the raw text and the regex match (None for
# pattern-less rules)
OutcomeBuilder = Callable[[str, "re.Match[str] | None"], Outcome]


@dataclass(frozen=True)
class GrammarRule:
    """
    One recognisable shape of vendor response.

    Attributes:
        name: Stable rule name, recorded on the outcome as "name@vN"
        build: Turns (raw text, match) into an Outcome
        pattern: Regex applied with re.search; None matches any text
        guard: Optional precondition on the raw text, checked before the pattern
        version: Bumped when the rule's captures or classification change
        parsed: False for catch-all rules that classify without understanding
    """

    name: str
    build: OutcomeBuilder
    pattern: "re.Pattern[str] | None" = None
    guard: Callable[[str], bool] | None = None
    version: int = 1
    parsed: bool = True

    @property
    def label(self) -> str:
        return f"{self.name}@v{self.version}"

    def apply(self, raw: str) -> Outcome | None:
        """Outcome for raw if this rule recognises it, otherwise None."""
        if self.guard is not None and not self.guard(raw):
            return None

        match = None
        if self.pattern is not None:
            match = self.pattern.search(raw)
            if match is None:
                return None

        outcome = self.build(raw, match)
        outcome.complete_response = raw
        outcome.rule = self.label
        outcome.parsed = self.parsed
        return outcome


class ResponseParser:
    """
    Ordered grammar for one gateway's responses.

    The fallback rule is always last and must accept any text, so parse()
    is total: every raw response yields exactly one outcome.
    """

    def __init__(self, gateway: Gateway, rules: list[GrammarRule], fallback: GrammarRule):
        if fallback.pattern is not None or fallback.guard is not None:
            raise ValueError("fallback rule must accept any response")
        self.gateway = gateway
        self.rules = list(rules)
        self.fallback = fallback

    def parse(self, raw: str) -> Outcome:
        """
        Classify a raw vendor response.

        Returns:
            Outcome with complete_response set to raw, verbatim
        """
        for rule in self.rules:
            outcome = rule.apply(raw)
            if outcome is not None:
                break
        else:
            outcome = self.fallback.apply(raw)

        if not outcome.parsed:
            logger.warning(
                f"Unrecognised {self.gateway.name} gateway response",
                extra={"gateway": self.gateway.value, "rule": outcome.rule, "raw": raw[:200]},
            )
        else:
            logger.debug(
                f"Parsed {self.gateway.name} gateway response",
                extra={"gateway": self.gateway.value, "rule": outcome.rule},
            )

        return outcome
