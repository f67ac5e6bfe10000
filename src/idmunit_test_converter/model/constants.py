"""Shared sheet layout constants."""

from __future__ import annotations

from enum import Enum

SECTION_DELIMITER = "---"
COMMENT_OPERATION = "comment"
FORMULA_META_TAG = "excel:isFormula"
OPERATION_CONFIG_PREFIX = "//"


class OperationConfigHeader(Enum):
    """Reserved operation-config column headers, in legacy column order."""

    COMMENT = "//Comment"
    OPERATION = "//Operation"
    TARGET = "//Target"
    WAIT_INTERVAL = "//WaitInterval"
    RETRY_COUNT = "//RetryCount"
    DISABLE_STEP = "//DisableStep"
    EXPECT_FAILURE = "//ExpectFailure"
    IS_CRITICAL = "//IsCritical"
    REPEAT_OP_RANGE = "//RepeatOpRange"

    @property
    def header(self) -> str:
        return self.value

    @classmethod
    def from_header(cls, text: str) -> OperationConfigHeader | None:
        """Return the header matching ``text`` exactly, or ``None``."""
        for member in cls:
            if member.value == text:
                return member
        return None


REQUIRED_CONFIG_HEADERS: tuple[OperationConfigHeader, ...] = (
    OperationConfigHeader.COMMENT,
    OperationConfigHeader.OPERATION,
    OperationConfigHeader.TARGET,
    OperationConfigHeader.WAIT_INTERVAL,
    OperationConfigHeader.RETRY_COUNT,
    OperationConfigHeader.DISABLE_STEP,
    OperationConfigHeader.EXPECT_FAILURE,
)
