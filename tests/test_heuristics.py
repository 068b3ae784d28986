import random

import pytest

from cyberfort.domain.models import VerdictSource
from cyberfort.heuristics import estimate_phone, scan_url, suspicious_reasons


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com",
        "https://docs.python.org/3/library/re.html",
        "https://github.com/pallets/flask",
    ],
)
def test_clean_urls_are_safe(url):
    verdict = scan_url(url)
    assert verdict.is_safe is True
    assert verdict.result == "No threats detected"
    assert verdict.source == VerdictSource.HEURISTIC
    assert verdict.stats is None


def test_ip_login_url_collects_reasons_in_rule_order():
    verdict = scan_url("http://192.168.1.1/login")
    assert verdict.is_safe is False
    assert verdict.result == (
        "Potential phishing keywords, Insecure protocol (HTTP), IP address in URL"
    )


@pytest.mark.parametrize(
    "url, reason",
    [
        ("https://free-prizes.xyz/claim", "Suspicious TLD"),
        ("https://example.com/signin", "Potential phishing keywords"),
        ("https://example.com/d41d8cd98f00b204e9800998ecf8427e", "Suspicious random string"),
        ("https://example.com/setup.exe", "Suspicious file extension"),
        ("http://example.com", "Insecure protocol (HTTP)"),
        ("https://10.0.0.1/", "IP address in URL"),
        ("https://example.com@evil.org/", "URL contains @ symbol"),
        ("https://bit.ly/abc", "URL shortener"),
        ("https://tinyurl.com/abc", "URL shortener"),
    ],
)
def test_single_rule(url, reason):
    assert suspicious_reasons(url) == [reason]


def test_tld_rule_needs_path_delimiter():
    assert suspicious_reasons("https://free-prizes.xyz") == []


def test_many_rules():
    reasons = suspicious_reasons("http://bit.ly/secure/d41d8cd98f00b204e9800998ecf8427e.exe")
    assert reasons == [
        "Potential phishing keywords",
        "Suspicious random string",
        "Suspicious file extension",
        "Insecure protocol (HTTP)",
        "URL shortener",
    ]


class PinnedRandom:
    def __init__(self, score, spam=0):
        self.score = score
        self.spam = spam

    def choice(self, seq):
        return seq[0]

    def randrange(self, *args):
        if args == (100,):
            return self.score
        return self.spam


def test_estimate_phone_north_america():
    verdict = estimate_phone("+14155551234", PinnedRandom(10))
    assert verdict.phone_number == "+14155551234"
    assert verdict.country == "United States"
    assert verdict.carrier == "AT&T"
    assert verdict.line_type == "Mobile"
    assert verdict.risk_score == 10
    assert verdict.is_safe is True
    assert verdict.details == {
        "valid": True,
        "formatted": "+1 (415) 555-1234",
        "spamReports": 0,
    }


def test_estimate_phone_other_country():
    verdict = estimate_phone("+442079460958", PinnedRandom(60, spam=7))
    assert verdict.country == "United Kingdom"
    assert verdict.carrier == "Vodafone"
    assert verdict.details["formatted"] == "+44 2079460958"
    assert verdict.risk_score == 60
    assert verdict.is_safe is False
    assert verdict.details["spamReports"] == 12


def test_repeated_digits_raise_risk():
    verdict = estimate_phone("+15555555555", PinnedRandom(40))
    assert verdict.risk_score == 60
    assert verdict.is_safe is False


def test_risk_is_capped():
    verdict = estimate_phone("+15555555555", PinnedRandom(99))
    assert verdict.risk_score == 100


def test_seeded_generator_is_reproducible():
    first = estimate_phone("+919876543210", random.Random(42))
    second = estimate_phone("+919876543210", random.Random(42))
    assert first == second
    assert first.carrier in {"Jio", "Airtel", "Vodafone Idea"}
    assert 0 <= first.risk_score <= 100
