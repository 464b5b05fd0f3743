import pytest

from exam_builder.core.prefill import ParentRef, parse_prefill
from exam_builder.db.models.enums import EntityKind

TEST_ID = "1b4e28ba-2fa1-11d2-883f-0016d3cca427"


def test_valid_id_is_parsed():
    assert parse_prefill(TEST_ID, EntityKind.TEST) == ParentRef(EntityKind.TEST, TEST_ID)


def test_surrounding_whitespace_is_ignored():
    assert parse_prefill(f"  {TEST_ID} ", EntityKind.LISTENING).id == TEST_ID


@pytest.mark.parametrize("raw", [None, "", "   ", "not-an-id", "123"])
def test_missing_or_garbled_means_no_prefill(raw):
    assert parse_prefill(raw, EntityKind.TEST) is None
