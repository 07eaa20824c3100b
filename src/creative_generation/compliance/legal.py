from __future__ import annotations

from dataclasses import dataclass, field

MAX_MESSAGE_LENGTH = 150
CLAIM_WORDS = ("best", "guaranteed", "proven", "scientific", "#1", "leading")
CALL_TO_ACTION_PHRASES = ("visit", "shop", "buy", "discover", "learn more", "click")


@dataclass(slots=True)
class LegalCheckResult:
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.issues


def evaluate_legal_text(message: str, prohibited_words: list[str]) -> LegalCheckResult:
    """Check campaign copy against prohibited words and advertising copy heuristics.

    Prohibited words are matched as case-insensitive substrings and produce one
    issue each.  Length, unsubstantiated claims and a missing call-to-action only
    produce warnings.
    """
    result = LegalCheckResult()
    lowered = message.lower()

    for word in prohibited_words:
        if word and word.lower() in lowered:
            result.issues.append(f"Prohibited word found: {word}")

    if len(message) > MAX_MESSAGE_LENGTH:
        result.warnings.append(
            f"Campaign message exceeds recommended length for social media ({MAX_MESSAGE_LENGTH} characters)"
        )

    found_claims = [word for word in CLAIM_WORDS if word in lowered]
    if found_claims:
        result.warnings.append(
            "Superlative claims found that may require substantiation: " + ", ".join(found_claims)
        )

    if not any(phrase in lowered for phrase in CALL_TO_ACTION_PHRASES):
        result.warnings.append("Consider adding a clear call-to-action")

    return result
