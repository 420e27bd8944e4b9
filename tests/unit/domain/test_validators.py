"""Unit tests for src/domain/validators.py."""

import pytest

from src.domain.validators import (
    compute_check_digit,
    is_valid_email,
    is_valid_password,
    is_valid_tax_id,
    is_valid_tax_id_digits,
    is_valid_tax_id_format,
)


@pytest.mark.unit
class TestEmailValidation:
    """Test the email shape check."""

    @pytest.mark.parametrize(
        "email",
        [
            "maria@example.com",
            "first.last@sub.example.com.br",
            "a@b.c",
            "user+tag@example.org",
        ],
    )
    def test_accepts_well_formed_emails(self, email: str) -> None:
        """Emails shaped like local@domain.tld pass."""
        assert is_valid_email(email) is True

    @pytest.mark.parametrize(
        "email",
        [
            "",
            "maria.example.com",
            "maria@example",
            "maria@example.",
            "@example.com",
            "maria@.com",
            "ma ria@example.com",
            "maria@exa mple.com",
            "maria@@example.com",
            "maria@example.com\n",
        ],
    )
    def test_rejects_malformed_emails(self, email: str) -> None:
        """Missing @, missing domain dot, whitespace and empty parts fail."""
        assert is_valid_email(email) is False


@pytest.mark.unit
class TestPasswordValidation:
    """Test the password complexity policy."""

    @pytest.mark.parametrize(
        "password",
        ["Str0ng@Pass", "aB3$aB3$", "Zz9!Zz9!Zz9!", "Passw0rd?"],
    )
    def test_accepts_complex_passwords(self, password: str) -> None:
        """Passwords meeting every rule pass."""
        assert is_valid_password(password) is True

    @pytest.mark.parametrize(
        ("password", "missing_rule"),
        [
            ("Sh0r@t", "length"),
            ("STR0NG@PASS", "lowercase"),
            ("str0ng@pass", "uppercase"),
            ("Strong@Pass", "digit"),
            ("Str0ngPass", "symbol"),
            ("Str0ng@Pass#", "allowed characters"),
            ("Str0ng@ Pass", "allowed characters"),
            ("Str0ng@Páss", "allowed characters"),
            ("", "length"),
        ],
    )
    def test_rejects_passwords_missing_a_rule(
        self, password: str, missing_rule: str
    ) -> None:
        """Failing any single rule rejects the password."""
        assert is_valid_password(password) is False, missing_rule

    def test_exactly_eight_characters_is_enough(self) -> None:
        """The minimum length is inclusive."""
        assert is_valid_password("aA1@aA1@") is True
        assert is_valid_password("aA1@aA1") is False


@pytest.mark.unit
class TestTaxIdFormat:
    """Test the DDD.DDD.DDD-DD structural check."""

    def test_accepts_punctuated_tax_id(self) -> None:
        """Dots after the 3rd and 6th digits and a hyphen before the last two."""
        assert is_valid_tax_id_format("111.444.777-35") is True

    @pytest.mark.parametrize(
        "tax_id",
        [
            "11144477735",
            "111.444.77735",
            "111-444-777.35",
            "111.444.777-3",
            "111.444.777-355",
            "1111.444.777-35",
            "abc.def.ghi-jk",
            "111.444.777-35 ",
            "",
        ],
    )
    def test_rejects_other_layouts(self, tax_id: str) -> None:
        """Anything but the exact layout fails."""
        assert is_valid_tax_id_format(tax_id) is False


@pytest.mark.unit
class TestTaxIdDigits:
    """Test the CPF digit count, blacklist and check digits."""

    @pytest.mark.parametrize(
        ("digits", "length", "expected"),
        [
            ("111444777", 9, 3),
            ("1114447773", 10, 5),
            ("529982247", 9, 2),
            ("5299822472", 10, 5),
            ("123456789", 9, 0),
            ("1234567890", 10, 9),
        ],
    )
    def test_compute_check_digit(
        self, digits: str, length: int, expected: int
    ) -> None:
        """Check digits follow the weighted mod-11 rule."""
        assert compute_check_digit(digits, length) == expected

    def test_remainder_of_ten_becomes_zero(self) -> None:
        """A remainder of 10 is coerced to 0."""
        # 9354113478 weighs to 287; 2870 % 11 == 10
        assert compute_check_digit("9354113478", 10) == 0

    def test_accepts_valid_tax_ids(self, valid_tax_ids: tuple[str, ...]) -> None:
        """Known-good CPFs pass the checksum."""
        for tax_id in valid_tax_ids:
            assert is_valid_tax_id_digits(tax_id) is True, tax_id

    def test_punctuation_is_ignored(self) -> None:
        """Only digits are considered by the checksum."""
        assert is_valid_tax_id_digits("11144477735") is True
        assert is_valid_tax_id_digits("111-444-777/35") is True

    @pytest.mark.parametrize(
        "tax_id",
        ["111.444.777-36", "111.444.777-45", "123.456.789-00", "529.982.247-52"],
    )
    def test_rejects_wrong_check_digits(self, tax_id: str) -> None:
        """A mismatch in either check digit fails."""
        assert is_valid_tax_id_digits(tax_id) is False

    @pytest.mark.parametrize("digit", "0123456789")
    def test_rejects_repeated_digit_sequences(self, digit: str) -> None:
        """All eleven identical digits are blacklisted."""
        assert is_valid_tax_id_digits(digit * 11) is False

    @pytest.mark.parametrize("tax_id", ["1114447773", "111444777350", ""])
    def test_rejects_wrong_digit_count(self, tax_id: str) -> None:
        """Exactly eleven digits are required."""
        assert is_valid_tax_id_digits(tax_id) is False


@pytest.mark.unit
class TestTaxIdCombined:
    """Test the combined format and checksum check."""

    def test_requires_both_checks(self) -> None:
        """Valid digits without punctuation fail; punctuation with bad digits fails."""
        assert is_valid_tax_id("111.444.777-35") is True
        assert is_valid_tax_id("11144477735") is False
        assert is_valid_tax_id("111.444.777-36") is False

    def test_blacklisted_tax_id_fails_even_when_well_formed(self) -> None:
        """111.111.111-11 is structurally valid but blacklisted."""
        assert is_valid_tax_id_format("111.111.111-11") is True
        assert is_valid_tax_id("111.111.111-11") is False
