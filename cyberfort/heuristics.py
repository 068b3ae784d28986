"""Local fallback verdicts used when remote reputation services are unavailable."""

import random
import re
from collections import Counter
from typing import List, NamedTuple

from .constants import (
    CARRIERS,
    COUNTRY_NAMES,
    MAX_RISK_SCORE,
    REPEATED_DIGIT_LIMIT,
    REPEATED_DIGIT_RISK,
    SAFE_RESULT,
    UNSAFE_RISK_THRESHOLD,
)
from .domain.models import PhoneVerdict, UrlVerdict, VerdictSource
from .phone_utils import clean_digits, detect_country_code, format_phone_number


class UrlRule(NamedTuple):
    pattern: "re.Pattern[str]"
    reason: str


# Order defines the order of reasons in the result; every matching rule counts.
URL_RULES: List[UrlRule] = [
    UrlRule(re.compile(r"\.(xyz|tk|ml|ga|cf|gq|pw)/"), "Suspicious TLD"),
    UrlRule(
        re.compile(r"(login|signin|account|secure|security|verify|verification)"),
        "Potential phishing keywords",
    ),
    UrlRule(re.compile(r"[0-9a-f]{32}"), "Suspicious random string"),
    UrlRule(re.compile(r"\.(exe|bin|dll|scr|bat|cmd|msi)$"), "Suspicious file extension"),
    UrlRule(re.compile(r"^(http://)"), "Insecure protocol (HTTP)"),
    UrlRule(re.compile(r"^https?://\d+\.\d+\.\d+\.\d+", re.ASCII), "IP address in URL"),
    UrlRule(re.compile(r"@"), "URL contains @ symbol"),
    UrlRule(re.compile(r"bitly|tinyurl|goo\.gl|t\.co|bit\.ly"), "URL shortener"),
]


def suspicious_reasons(url: str) -> List[str]:
    """Return the reason of every rule matching ``url``."""
    return [rule.reason for rule in URL_RULES if rule.pattern.search(url)]


def scan_url(url: str) -> UrlVerdict:
    """Build a verdict for ``url`` from the red-flag rules alone."""
    reasons = suspicious_reasons(url)
    return UrlVerdict(
        is_safe=not reasons,
        result=", ".join(reasons) if reasons else SAFE_RESULT,
        source=VerdictSource.HEURISTIC,
    )


def _max_digit_repeats(cleaned: str) -> int:
    counts = Counter(cleaned)
    return max(counts.values()) if counts else 0


def estimate_phone(phone_number: str, rng: random.Random) -> PhoneVerdict:
    """Guess country, carrier and risk for an already normalized number.

    Carrier choice and the base risk score come from ``rng``; pass a seeded
    generator to get reproducible verdicts.
    """
    cleaned = clean_digits(phone_number)
    code = detect_country_code(cleaned)
    carrier = rng.choice(CARRIERS.get(code, ["Unknown"]))

    risk_score = rng.randrange(100)
    if _max_digit_repeats(cleaned) > REPEATED_DIGIT_LIMIT:
        risk_score += REPEATED_DIGIT_RISK
    risk_score = min(risk_score, MAX_RISK_SCORE)

    spam_reports = rng.randrange(50) + 5 if risk_score > UNSAFE_RISK_THRESHOLD else 0
    return PhoneVerdict(
        phone_number=phone_number,
        is_safe=risk_score < UNSAFE_RISK_THRESHOLD,
        country=COUNTRY_NAMES.get(code, "Unknown"),
        carrier=carrier,
        line_type="Mobile",
        risk_score=risk_score,
        details={
            "valid": True,
            "formatted": format_phone_number(cleaned, code),
            "spamReports": spam_reports,
        },
        source=VerdictSource.HEURISTIC,
    )
