import secrets
from datetime import timedelta

import pytest

from onetime.domain.entities.token import Token
from onetime.domain.value_objects.token_filter import TokenChanges, TokenFilter
from tests.utils.clock import EPOCH

TOKEN = Token(id=1, user_id=7, code="c" * 32, completed=False, created_at=EPOCH)


def test_empty_filter_matches_everything():
    assert TokenFilter().matches(TOKEN)


@pytest.mark.parametrize(
    "token_filter, expected",
    [
        (TokenFilter(user_id=7), True),
        (TokenFilter(user_id=8), False),
        (TokenFilter(code="c" * 32), True),
        (TokenFilter(code="d" * 32), False),
        (TokenFilter(completed=False), True),
        (TokenFilter(completed=True), False),
        (TokenFilter(user_id=7, completed=False, code="c" * 32), True),
        (TokenFilter(user_id=7, completed=True, code="c" * 32), False),
    ],
)
def test_field_conditions(token_filter, expected):
    assert token_filter.matches(TOKEN) is expected


@pytest.mark.parametrize("code", ["c" * 31, "c" * 33, "", "C" * 32, "\u00e7" * 32])
def test_code_condition_requires_exact_value(code):
    assert not TokenFilter(code=code).matches(TOKEN)


def test_code_condition_compares_in_constant_time(monkeypatch):
    calls = []
    real_compare = secrets.compare_digest

    def recording_compare(a, b):
        calls.append((a, b))
        return real_compare(a, b)

    monkeypatch.setattr(secrets, "compare_digest", recording_compare)

    assert TokenFilter(code="c" * 32).matches(TOKEN)
    assert calls == [(b"c" * 32, b"c" * 32)]


def test_created_after_is_strict():
    assert TokenFilter(created_after=EPOCH - timedelta(seconds=1)).matches(TOKEN)
    assert not TokenFilter(created_after=EPOCH).matches(TOKEN)


def test_created_at_or_before_is_inclusive():
    assert TokenFilter(created_at_or_before=EPOCH).matches(TOKEN)
    assert not TokenFilter(created_at_or_before=EPOCH - timedelta(seconds=1)).matches(TOKEN)


def test_changes_only_allow_completion():
    with pytest.raises(ValueError):
        TokenChanges(completed=False, completed_at=EPOCH)
