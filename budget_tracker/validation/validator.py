"""
Input Validation

Checks what the user typed before anything touches the transaction list
or the stored account.

IMPORTANT: Validation NEVER silently fixes issues. A blank description is
not replaced by a default and an unknown category is not mapped to
"Other". Problems are reported and the operation is rejected.
"""

from typing import Optional

from budget_tracker.formatting.currency import parse_amount, to_raw
from budget_tracker.models.transaction import Category
from budget_tracker.models.validation import ValidationIssue, ValidationResult


class TransactionInputValidator:
    """Validates the three fields of the add / edit transaction form."""

    def validate(
        self,
        desc: Optional[str],
        raw_amount,
        category,
    ) -> ValidationResult:
        """
        Validate one form submission.

        Args:
            desc: Description text
            raw_amount: Amount as typed (a leading minus marks an expense)
            category: Category member, value or name

        Returns:
            ValidationResult with issues, and parsed values when valid
        """
        issues = []

        clean_desc = desc.strip() if isinstance(desc, str) else ""
        if not clean_desc:
            issues.append(ValidationIssue(
                field="desc",
                issue_type="missing",
                message="Description is required",
                severity="error",
            ))

        amount = parse_amount(raw_amount)
        if amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if not raw_amount else "invalid_format",
                message=(
                    "Amount is too large"
                    if any(ch.isdigit() for ch in to_raw(raw_amount))
                    else "Amount must contain a number"
                ),
                severity="error",
            ))
        elif amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="zero_amount",
                message="A zero amount is neither income nor expense and will not be charted",
                severity="warning",
            ))

        parsed_category = Category.parse(category)
        if parsed_category is None:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing" if not category else "unknown_value",
                message=(
                    "Category is required"
                    if not category
                    else f"Unknown category: {category}"
                ),
                severity="error",
            ))

        result = ValidationResult(issues=issues)
        if not result.has_errors:
            result.desc = clean_desc
            result.amount = amount
            result.category = parsed_category
        return result

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text for an inline message under the form."""
        if result.is_valid and not result.warnings:
            return "✅ Ready to save."

        lines = []
        for issue in result.issues:
            if issue.severity == "error":
                lines.append(f"❌ {issue.message}")
        for warning in result.warnings:
            lines.append(f"⚠️ {warning}")
        return "\n".join(lines)


def validate_credentials(username: Optional[str], password: Optional[str]) -> list[ValidationIssue]:
    """Both signup fields are required. Returns the issues found."""
    issues = []
    if not (username or "").strip():
        issues.append(ValidationIssue(
            field="username",
            issue_type="missing",
            message="Username is required",
            severity="error",
        ))
    if not password:
        issues.append(ValidationIssue(
            field="password",
            issue_type="missing",
            message="Password is required",
            severity="error",
        ))
    return issues
