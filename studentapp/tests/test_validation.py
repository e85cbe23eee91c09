import pytest

from studentapp.validation import (
    INVALID_EMAIL_MESSAGE,
    REQUIRED_MESSAGE,
    is_valid_email,
    parse_id,
    validate,
)


def test_empty_name_is_required_error():
    res = validate("", "a@b.com", "CS")
    assert not res.ok
    assert res.error == "All fields are required."
    assert res.student is None


def test_bad_email_message():
    res = validate("John", "not-an-email", "CS")
    assert not res.ok
    assert res.error == "Please enter a valid email address."


def test_fields_are_trimmed():
    res = validate(" John ", " a@b.com ", " CS ")
    assert res.ok
    assert res.error is None
    assert tuple(res.student) == ("John", "a@b.com", "CS")
    assert res.student.email == "a@b.com"


def test_whitespace_only_counts_as_empty():
    assert validate("John", "a@b.com", "   ").error == REQUIRED_MESSAGE


def test_none_counts_as_empty():
    assert validate(None, "a@b.com", "CS").error == REQUIRED_MESSAGE


def test_required_check_runs_before_email_check():
    # both rules fail; only the first message comes back
    res = validate("", "not-an-email", "CS")
    assert res.error == REQUIRED_MESSAGE


@pytest.mark.parametrize(
    "email",
    [
        "a@b.com",
        "first.last@example.org",
        "first.last+tag@sub.example.co.uk",
        "o'brien@example.ie",
        "x_y-z@my-host.io",
    ],
)
def test_valid_emails(email):
    assert is_valid_email(email)
    assert validate("John", email, "CS").ok


@pytest.mark.parametrize(
    "email",
    [
        "plainaddress",
        "a@b",
        "a@@b.com",
        "a@b@c.com",
        "@example.com",
        "john@",
        ".john@example.com",
        "john.@example.com",
        "jo..hn@example.com",
        "john doe@example.com",
        "john@-example.com",
        "john@example-.com",
        "john@example..com",
        "john@example.com.",
    ],
)
def test_invalid_emails(email):
    assert not is_valid_email(email)
    assert validate("John", email, "CS").error == INVALID_EMAIL_MESSAGE


def test_email_length_limits():
    local = "a" * 65
    assert not is_valid_email(f"{local}@example.com")
    assert is_valid_email(f"{'a' * 64}@example.com")
    long_domain = ".".join(["d" * 60] * 5) + ".com"
    assert not is_valid_email(f"a@{long_domain}")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5", 5),
        (" 7 ", 7),
        (3, 3),
        ("0", None),
        ("-1", None),
        ("1.5", None),
        ("abc", None),
        ("", None),
        (None, None),
        (0, None),
        (True, None),
        (str(2**63 - 1), 2**63 - 1),
        (str(2**63), None),
        (2**63, None),
        ("9" * 40, None),
    ],
)
def test_parse_id(raw, expected):
    assert parse_id(raw) == expected
