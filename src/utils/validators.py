"""Input validation utilities."""

from typing import Optional

from utils.exceptions import InvalidInputError


class InputValidator:
    """Validates user inputs for the CLI."""

    def validate_creative_count(self, count_str: str) -> bool:
        """Validate number of creatives.

        Args:
            count_str: Creative count as string

        Returns:
            True if a positive integer
        """
        value = self._to_int(count_str)
        return value is not None and value > 0

    def validate_total(self, total_str: str) -> bool:
        """Validate a metric total.

        Empty input counts as zero.

        Args:
            total_str: Total as string

        Returns:
            True if a non-negative integer
        """
        if total_str is None or not str(total_str).strip():
            return True
        value = self._to_int(total_str)
        return value is not None and value >= 0

    def validate_label(self, label: str) -> bool:
        """Validate a column label (must not be blank)."""
        return label is not None and bool(str(label).strip())

    def parse_creative_count(self, count_str: str) -> int:
        if not self.validate_creative_count(count_str):
            raise InvalidInputError(
                f"Invalid number of creatives: {count_str!r}. Please enter a whole number greater than 0"
            )
        return int(str(count_str).strip())

    def parse_total(self, total_str: str, label: str = "total") -> int:
        if not self.validate_total(total_str):
            raise InvalidInputError(
                f"Invalid {label}: {total_str!r}. Please enter a whole number of 0 or more"
            )
        if total_str is None or not str(total_str).strip():
            return 0
        return int(str(total_str).strip())

    @staticmethod
    def _to_int(value: str) -> Optional[int]:
        if value is None:
            return None
        try:
            return int(str(value).strip())
        except ValueError:
            return None
