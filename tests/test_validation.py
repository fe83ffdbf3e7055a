import pytest

from core.validation import (
    MAX_HANDLE_LENGTH,
    parse_handles_input,
    validate_handle,
    validate_multiple_handles,
)


@pytest.mark.parametrize("handle", [
    "abc",
    "validHandle",
    "my-channel_01",
    "a_b",
    "x" * MAX_HANDLE_LENGTH,
    "  padded  ",
    "123",
    "A-1",
])
def test_valid_handles(handle):
    assert validate_handle(handle) is None


@pytest.mark.parametrize("handle,fragment", [
    ("", "cannot be empty"),
    ("   ", "cannot be empty"),
    ("ab", "at least 3"),
    ("a", "at least 3"),
    ("x" * (MAX_HANDLE_LENGTH + 1), "cannot exceed 30"),
    ("-abc", "start and end with alphanumeric"),
    ("abc_", "start and end with alphanumeric"),
    ("ab c", "start and end with alphanumeric"),
    ("héllo", "start and end with alphanumeric"),
    ("ab.cd", "start and end with alphanumeric"),
])
def test_invalid_handles(handle, fragment):
    error = validate_handle(handle)
    assert error is not None
    assert fragment in error.message
    assert error.handle == handle


@pytest.mark.parametrize("handle", ["admin", "Admin", "ADMIN", " root ", "Support", "help", "system"])
def test_reserved_handles(handle):
    error = validate_handle(handle)
    assert error is not None
    assert "reserved" in error.message


def test_first_failing_rule_wins():
    # demasiado corto y con caracteres inválidos: gana la longitud
    error = validate_handle("-_")
    assert "at least 3" in error.message


def test_validate_multiple_partitions_and_normalizes():
    report = validate_multiple_handles(["ab", "validHandle", "admin"])

    assert report.valid == ["validhandle"]
    assert len(report.errors) == 2
    assert "at least 3" in report.errors[0].message
    assert "reserved" in report.errors[1].message


def test_validate_multiple_keeps_order_and_duplicates():
    report = validate_multiple_handles(["Beta", " alpha ", "beta"])

    assert report.valid == ["beta", "alpha", "beta"]
    assert report.errors == []


def test_parse_handles_input_cleans_lines():
    text = "\n  @First \nsec ond\n\n\t\nthird\n@\n"
    assert parse_handles_input(text) == ["First", "second", "third"]


def test_parse_handles_input_limit():
    text = "\n".join(f"handle{i}" for i in range(60))

    assert len(parse_handles_input(text)) == 50
    assert parse_handles_input(text, limit=3) == ["handle0", "handle1", "handle2"]
    assert len(parse_handles_input(text, limit=None)) == 60
