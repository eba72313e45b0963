"""
Calculator Input Validation

DESIGN DECISION: Validation happens at the form boundary, before the
calculator sees anything. The calculator itself never validates.

ERRORS (block the calculation):
- Missing income or family size
- Text that is not a whole number
- Unknown area

WARNINGS (reported, calculation still allowed):
- Negative income or family size. The formula accepts these, so we
  flag them for the user instead of refusing.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the presentation layer to show.
"""

import re
from typing import Optional, Union

from electricity_subsidy.models.calculation import (
    Area,
    CalculationInput,
    InputValidationIssue,
    InputValidationResult,
    IssueSeverity,
)


_WHOLE_NUMBER = re.compile(r"^\s*[+-]?\d+\s*$")

MISSING_INCOME_MESSAGE = "Please enter your monthly income"
MISSING_FAMILY_MESSAGE = "Please enter the number of family members"
INVALID_NUMBER_MESSAGE = "Please enter a valid number"


class CalculationInputValidator:
    """Turns raw form text into a CalculationInput, or explains why not."""

    def _parse_whole_number(
        self,
        field: str,
        value: Optional[str],
        missing_message: str,
    ) -> tuple[Optional[int], list[InputValidationIssue]]:
        if value is None or not value.strip():
            return None, [InputValidationIssue(
                field=field,
                message=missing_message,
                severity=IssueSeverity.ERROR,
            )]

        if not _WHOLE_NUMBER.match(value):
            return None, [InputValidationIssue(
                field=field,
                message=INVALID_NUMBER_MESSAGE,
                severity=IssueSeverity.ERROR,
            )]

        try:
            number = int(value)
        except ValueError:
            # Digit strings past the interpreter's int conversion limit
            return None, [InputValidationIssue(
                field=field,
                message=INVALID_NUMBER_MESSAGE,
                severity=IssueSeverity.ERROR,
            )]

        issues = []
        if number < 0:
            issues.append(InputValidationIssue(
                field=field,
                message=f"Negative value ({number}) gives an unusual subsidy; please double-check",
                severity=IssueSeverity.WARNING,
            ))
        return number, issues

    def _parse_area(
        self,
        value: Union[Area, str, None],
    ) -> tuple[Optional[Area], list[InputValidationIssue]]:
        if isinstance(value, Area):
            return value, []

        text = (value or "").strip().lower()
        for area in Area:
            if area.value.lower() == text:
                return area, []

        allowed = ", ".join(a.value for a in Area)
        return None, [InputValidationIssue(
            field="area",
            message=f"Please select an area ({allowed})",
            severity=IssueSeverity.ERROR,
        )]

    def validate(
        self,
        income_text: Optional[str],
        family_members_text: Optional[str],
        area: Union[Area, str, None] = Area.URBAN,
    ) -> InputValidationResult:
        """
        Validate the three calculator form fields.

        Args:
            income_text: Raw monthly income text
            family_members_text: Raw household size text
            area: Selected area (Area or its string value)

        Returns:
            InputValidationResult with parsed input when there are no errors
        """
        income, income_issues = self._parse_whole_number(
            "income", income_text, MISSING_INCOME_MESSAGE
        )
        family_members, family_issues = self._parse_whole_number(
            "family_members", family_members_text, MISSING_FAMILY_MESSAGE
        )
        parsed_area, area_issues = self._parse_area(area)

        issues = income_issues + family_issues + area_issues
        has_errors = any(i.severity == IssueSeverity.ERROR for i in issues)

        parsed = None
        if not has_errors:
            parsed = CalculationInput(
                income=income,
                family_members=family_members,
                area=parsed_area,
            )

        return InputValidationResult(issues=issues, parsed=parsed)
