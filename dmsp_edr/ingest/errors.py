"""Decode failures raised by the EDR reader.

Every error carries the cursor position (number of lines consumed when the
failure was detected) and a short ``kind`` string that drivers can report
without matching on classes.
"""

from __future__ import annotations

from typing import Optional, Type


class EdrDecodeError(ValueError):
    kind = "decode_error"

    def __init__(self, message: str, line: int) -> None:
        self.line = int(line)
        super().__init__(f"line {self.line}: {message}")


class EndOfInput(EdrDecodeError):
    """Input exhausted. Only a clean stop when raised at a record boundary."""

    kind = "end_of_input"

    def __init__(self, line: int) -> None:
        super().__init__("end of input", line)


class MalformedScalar(EdrDecodeError):
    kind = "malformed_scalar"


class UnrecognizedEnumCode(EdrDecodeError):
    kind = "unrecognized_enum_code"

    def __init__(self, code: int, line: int, enum: Optional[Type] = None) -> None:
        self.code = int(code)
        self.enum = enum
        name = enum.__name__ if enum is not None else "code table"
        super().__init__(f"{self.code} is not a valid {name}", line)


class TruncatedInput(EdrDecodeError):
    kind = "truncated_input"

    def __init__(self, line: int, record_start: int) -> None:
        self.record_start = int(record_start)
        super().__init__(f"end of input inside record starting after line {self.record_start}", line)
