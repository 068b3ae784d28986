"""Fixed tables used by the local fallback heuristics."""

SAFE_RESULT = "No threats detected"

# Calling codes are tried in this order; the first prefix match wins.
COUNTRY_CODES = ("1", "44", "61", "33", "49", "81", "86", "91")
DEFAULT_COUNTRY_CODE = "1"

COUNTRY_NAMES = {
    "1": "United States",
    "44": "United Kingdom",
    "61": "Australia",
    "33": "France",
    "49": "Germany",
    "81": "Japan",
    "86": "China",
    "91": "India",
}

CARRIERS = {
    "1": ["AT&T", "Verizon", "T-Mobile", "Sprint"],
    "44": ["Vodafone", "EE", "O2", "Three"],
    "61": ["Telstra", "Optus", "Vodafone"],
    "33": ["Orange", "SFR", "Free Mobile"],
    "49": ["T-Mobile", "Vodafone", "O2"],
    "81": ["NTT DoCoMo", "au", "SoftBank"],
    "86": ["China Mobile", "China Unicom", "China Telecom"],
    "91": ["Jio", "Airtel", "Vodafone Idea"],
}

UNSAFE_RISK_THRESHOLD = 50
MAX_RISK_SCORE = 100
INVALID_NUMBER_RISK = 70
VOIP_RISK = 30
REPEATED_DIGIT_RISK = 20
REPEATED_DIGIT_LIMIT = 4
