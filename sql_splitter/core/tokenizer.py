"""
Statement tokenizer for SQL scripts.

Splits raw SQL text into individual statements at top-level semicolons.
Semicolons inside single-quoted string literals are kept, and backslashes
inside literals escape the following quote.

This is a simplified scanner, not a SQL parser: comments, double-quoted
identifiers and dollar-quoted strings are not recognized, so a semicolon
inside any of those ends the statement early.
"""
import logging
from typing import List

logger = logging.getLogger(__name__)


class StatementTokenizer:
    """
    Incremental statement scanner.

    Text can be fed in any number of chunks; completed statements are returned
    from each call to ``feed`` and the trailing statement from ``close``.

    Attributes:
        in_string: Inside a single-quoted literal
        escape_next: Previous backslash inside a literal has not been consumed
        buffer: Characters accumulated for the current statement
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Reset the scanning state."""
        self.in_string = False
        self.escape_next = False
        self.buffer: List[str] = []

    def _take_statement(self) -> str:
        statement = "".join(self.buffer).strip()
        self.buffer = []
        return statement

    def feed(self, text: str) -> List[str]:
        """
        Scan a chunk of text.

        Args:
            text: Next chunk of the SQL script

        Returns:
            Statements completed within this chunk, in source order
        """
        statements = []
        for char in text:
            if char == "\\" and self.in_string:
                self.buffer.append(char)
                self.escape_next = not self.escape_next
            elif char == "'" and not self.escape_next:
                self.buffer.append(char)
                self.in_string = not self.in_string
            elif char == ";" and not self.in_string:
                statement = self._take_statement()
                if statement:
                    statements.append(statement)
            else:
                # An escaped quote consumes the pending escape
                if char == "'":
                    self.escape_next = False
                self.buffer.append(char)
        return statements

    def close(self) -> List[str]:
        """
        Flush the trailing statement that has no terminator.

        An unterminated string literal is not an error; its content simply
        ends up in the final statement.
        """
        if self.in_string:
            logger.debug("Input ended inside a string literal")
        statement = self._take_statement()
        self.reset()
        return [statement] if statement else []


def split_statements(content: str) -> List[str]:
    """
    Split a SQL script into statements.

    Args:
        content: Full text of the script

    Returns:
        Trimmed, non-empty statements without their terminating semicolons
    """
    tokenizer = StatementTokenizer()
    statements = tokenizer.feed(content)
    statements.extend(tokenizer.close())
    logger.debug(f"Tokenized {len(content)} characters into {len(statements)} statements")
    return statements
