"""Tests for form input validation."""

from budget_tracker.models import Category
from budget_tracker.validation import TransactionInputValidator, validate_credentials


class TestTransactionInputValidator:
    """Tests for the add / edit form checks."""

    def setup_method(self):
        self.validator = TransactionInputValidator()

    def test_valid_expense(self):
        result = self.validator.validate("  Coffee ", "-4.50", "Food & Dining")

        assert result.is_valid
        assert result.desc == "Coffee"
        assert result.amount == -4.5
        assert result.category == Category.FOOD_AND_DINING

    def test_category_by_name(self):
        result = self.validator.validate("Taxi", "12", "transportation")
        assert result.category == Category.TRANSPORTATION

    def test_all_fields_missing(self):
        result = self.validator.validate("", "", None)

        assert result.error_count == 3
        assert [i.field for i in result.issues] == ["desc", "amount", "category"]
        assert all(i.issue_type == "missing" for i in result.issues)
        assert result.amount is None

    def test_issue_types(self):
        result = self.validator.validate("Lunch", "abc", "Housing")
        types = {i.field: i.issue_type for i in result.issues}
        assert types == {"amount": "invalid_format", "category": "unknown_value"}

    def test_unknown_category_is_not_remapped(self):
        result = self.validator.validate("Lunch", "10", "Groceries")
        assert result.has_errors
        assert result.category is None

    def test_zero_amount_is_a_warning(self):
        result = self.validator.validate("Nothing", "0", Category.OTHER)

        assert result.is_valid
        assert result.amount == 0
        assert len(result.warnings) == 1

    def test_summary(self):
        ok = self.validator.validate("Coffee", "-4", Category.OTHER)
        bad = self.validator.validate("", "-4", Category.OTHER)

        assert "Ready" in self.validator.get_user_friendly_summary(ok)
        assert "Description is required" in self.validator.get_user_friendly_summary(bad)


class TestValidateCredentials:
    """Tests for the signup field checks."""

    def test_valid(self):
        assert validate_credentials("alice", "secret") == []

    def test_blank(self):
        issues = validate_credentials("  ", "")
        assert [i.field for i in issues] == ["username", "password"]

    def test_none(self):
        assert len(validate_credentials(None, None)) == 2


class TestAmountRange:
    """Tests for amounts beyond float range."""

    def test_too_large_amount_is_invalid(self):
        result = TransactionInputValidator().validate("Big", "-" + "9" * 400, Category.OTHER)

        assert result.has_errors
        assert result.amount is None
        issue = result.issues[0]
        assert (issue.field, issue.issue_type) == ("amount", "invalid_format")
        assert issue.message == "Amount is too large"
