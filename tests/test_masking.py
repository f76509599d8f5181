"""Tests for display masking."""

from __future__ import annotations

import pytest

from piishield.sanitize.masking import MASK_RULES, mask_for_display
from piishield.sanitize.models import PIICategory


class TestEmailMask:
    def test_basic(self) -> None:
        assert mask_for_display("john.doe@example.com", "email") == "j***@example.com"

    def test_enum_category(self) -> None:
        assert mask_for_display("jane@example.com", PIICategory.EMAIL) == "j***@example.com"

    def test_short_value_unchanged(self) -> None:
        assert mask_for_display("ab", "email") == "ab"

    def test_no_at_sign_unchanged(self) -> None:
        assert mask_for_display("not-an-email", "email") == "not-an-email"

    def test_empty_local_part_unchanged(self) -> None:
        assert mask_for_display("@example.com", "email") == "@example.com"

    def test_splits_at_first_at(self) -> None:
        assert mask_for_display("a@b@c.com", "email") == "a***@b@c.com"


class TestPhoneMask:
    def test_basic(self) -> None:
        assert mask_for_display("555-123-4567", "phone") == "***-***-4567"

    def test_international(self) -> None:
        assert mask_for_display("+1 (555) 123-9876", "phone") == "***-***-9876"

    def test_short_value_unchanged(self) -> None:
        assert mask_for_display("123", "phone") == "123"

    def test_too_few_digits_unchanged(self) -> None:
        assert mask_for_display("ext-12", "phone") == "ext-12"


class TestCardMask:
    def test_basic(self) -> None:
        assert mask_for_display("4111111111111111", "card") == "****-****-****-1111"

    def test_grouped(self) -> None:
        assert mask_for_display("4111 1111 1111 4242", "card") == "****-****-****-4242"

    def test_short_value_unchanged(self) -> None:
        assert mask_for_display("111", "card") == "111"


class TestNameMask:
    def test_basic(self) -> None:
        assert mask_for_display("Johnson", "name") == "J***n"

    def test_short_value_unchanged(self) -> None:
        assert mask_for_display("Al", "name") == "Al"


class TestMaskForDisplay:
    def test_category_without_rule_unchanged(self) -> None:
        assert mask_for_display("123 Main St", "address") == "123 Main St"

    def test_unknown_category_raises(self) -> None:
        with pytest.raises(ValueError):
            mask_for_display("x", "shoe_size")

    def test_upper_case_category_name(self) -> None:
        assert mask_for_display("john.doe@example.com", "EMAIL") == "j***@example.com"
        assert mask_for_display("555-123-4567", "Phone") == "***-***-4567"

    def test_rules_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            MASK_RULES[PIICategory.ADDRESS] = MASK_RULES[PIICategory.NAME]  # type: ignore[index]

    @pytest.mark.parametrize(
        ("category", "threshold"),
        [(PIICategory.EMAIL, 2), (PIICategory.PHONE, 3), (PIICategory.CARD, 3)],
    )
    def test_thresholds(self, category: PIICategory, threshold: int) -> None:
        assert MASK_RULES[category].min_length == threshold
