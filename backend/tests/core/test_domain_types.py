"""Domain Types - verifies identity wrappers and the Gender enum."""

from app.core.domain_types import Gender, ItemId, SurvivorId


def test_identity_types_wrap_int():
    assert SurvivorId(3) == 3
    assert ItemId(4) == 4


def test_gender_values_match_registration_choices():
    assert {g.value for g in Gender} == {
        "male", "female", "non-binary", "genderqueer", "genderfluid",
        "agender", "bigender", "undisclosed", "other",
    }


def test_gender_is_str_enum():
    assert Gender("non-binary") is Gender.NON_BINARY
    assert Gender.FEMALE == "female"
