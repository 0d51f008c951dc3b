import pytest

from api_mock_gen.generator.heuristics import resolve_string_value


class TestFormats:
    @pytest.mark.parametrize(
        "fmt, expected",
        [
            ("date-time", "2020-01-01T00:00:00.000Z"),
            ("time", "00:00"),
            ("date", "2020-01-01"),
            ("uuid", "abcd-abcd-abcd"),
            ("email", "email@example.com"),
            ("idn-email", "email@example.com"),
            ("hostname", "example.com"),
            ("idn-hostname", "example.com"),
            ("ipv4", "127.0.0.1"),
            ("ipv6", "::1"),
            ("uri", "https://example.com"),
            ("iri-reference", "https://example.com"),
            ("uri-template", "https://example.com"),
        ],
    )
    def test_declared_format(self, fmt, expected):
        assert resolve_string_value(format=fmt) == expected

    def test_unknown_format_falls_back_to_filler(self):
        assert resolve_string_value(format="binary") == "lorem ipsum dolor"


class TestFieldKeys:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("created_at", "2020-01-01T00:00:00.000Z"),
            ("UPDATED_AT", "2020-01-01T00:00:00.000Z"),
            ("id", "abcd-abcd-abcd"),
            ("userId", "abcd-abcd-abcd"),
            ("contactEmail", "email@example.com"),
            ("homepage_url", "https://example.com"),
            ("avatarImageUrl", "https://example.com/image.png"),
            ("profile_picture_url", "https://example.com/image.png"),
            ("name", "John Doe"),
            ("lastName", "John Doe"),
            ("street", "123 Main Street"),
            ("city", "New-York"),
            ("state", "USA"),
            ("zipCode", "12345"),
        ],
    )
    def test_key_heuristic(self, key, expected):
        assert resolve_string_value(key=key) == expected

    def test_format_rule_beats_later_key_rule(self):
        assert resolve_string_value(format="date", key="name") == "2020-01-01"

    def test_earlier_key_rule_beats_later_format_rule(self):
        # Key ending with "id" is checked before email formats.
        assert resolve_string_value(format="email", key="paid") == "abcd-abcd-abcd"

    def test_non_string_key_is_compared_as_text(self):
        assert resolve_string_value(key=200) == "lorem ipsum dolor"
        assert resolve_string_value(key=1234567) == "lorem ipsum dolor"

    def test_photo_without_url_is_not_a_url(self):
        assert resolve_string_value(key="photo") == "lorem ipsum dolor"


class TestLengthAndPattern:
    def test_min_length(self):
        assert resolve_string_value(min_length=3) == "aaa"

    def test_min_length_wins_over_max_length(self):
        assert resolve_string_value(min_length=2, max_length=50) == "aa"

    def test_max_length_is_capped(self):
        assert resolve_string_value(max_length=50) == "a" * 10
        assert resolve_string_value(max_length=4) == "aaaa"

    def test_valid_pattern(self):
        assert resolve_string_value(pattern=r"^\d{3}$") == "pattern"

    def test_invalid_pattern_falls_back(self):
        assert resolve_string_value(pattern="([a-z") == "lorem ipsum dolor"

    def test_non_string_format_and_pattern_are_ignored(self):
        assert resolve_string_value(format=["uri"]) == "lorem ipsum dolor"
        assert resolve_string_value(format={"type": "email"}, key="email") == "email@example.com"
        assert resolve_string_value(pattern=["^a$"]) == "lorem ipsum dolor"

    def test_non_integer_lengths_are_ignored(self):
        assert resolve_string_value(min_length=2.5) == "lorem ipsum dolor"
        assert resolve_string_value(max_length=True) == "lorem ipsum dolor"

    def test_fallback(self):
        assert resolve_string_value() == "lorem ipsum dolor"
