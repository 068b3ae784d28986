"""
Unit tests for validators.
"""

import unittest

from cyberfort.exceptions import InvalidInput
from cyberfort.validators import validate_phone_number, validate_url


class TestValidators(unittest.TestCase):
    """Test cases for validators."""

    def test_validate_url(self):
        self.assertEqual(validate_url("https://example.com"), "https://example.com")
        self.assertEqual(
            validate_url("http://sub.example-site.org/path?q=1"),
            "http://sub.example-site.org/path?q=1",
        )
        self.assertEqual(validate_url("http://192.168.1.1.nip.io/"), "http://192.168.1.1.nip.io/")
        self.assertEqual(validate_url("http://192.168.1.1/login"), "http://192.168.1.1/login")

    def test_invalid_urls(self):
        for url in [
            "example.com",
            "ftp://example.com",
            "https://localhost",
            "https://example.c",
            "https://exa mple.com",
            "https://example.com\n/evil",
        ]:
            with self.subTest(url=url):
                with self.assertRaises(InvalidInput):
                    validate_url(url)

    def test_missing_url(self):
        with self.assertRaises(InvalidInput) as ctx:
            validate_url("")
        self.assertEqual(str(ctx.exception), "URL is required")
        with self.assertRaises(InvalidInput):
            validate_url(None)

    def test_validate_phone_number(self):
        self.assertEqual(validate_phone_number("08031234567"), "08031234567")
        self.assertEqual(validate_phone_number("+1 (415) 555-1234"), "+1 (415) 555-1234")

        with self.assertRaises(InvalidInput):
            validate_phone_number("123-456-789")  # Only nine digits
        with self.assertRaises(InvalidInput) as ctx:
            validate_phone_number(None)
        self.assertEqual(str(ctx.exception), "Phone number is required")


if __name__ == "__main__":
    unittest.main()
