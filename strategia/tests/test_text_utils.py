import pytest

from strategia.utils.text import split_lines


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Support\nOnboarding", ["Support", "Onboarding"]),
        ("  Support  \n\n   \nOnboarding\n", ["Support", "Onboarding"]),
        (["  a ", "", "b"], ["a", "b"]),
        ("", []),
        (None, []),
    ],
)
def test_split_lines(value, expected):
    assert split_lines(value) == expected
