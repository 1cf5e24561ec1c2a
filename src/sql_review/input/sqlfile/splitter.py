from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class SplitStatement:
    sql: str
    line: int


class SqlStatementSplitter:
    """Splits a SQL script into top-level statements on ``;``.

    Semicolons inside quoted strings, quoted identifiers and comments do not
    end a statement. Fragments holding only whitespace or comments are dropped.
    """

    _closers: ClassVar[dict[str, str]] = {"'": "'", '"': '"', "`": "`", "[": "]"}

    def split(self, text: str) -> list[SplitStatement]:
        statements: list[SplitStatement] = []
        buffer: list[str] = []
        start_line: int | None = None
        quote: str | None = None
        line = 1
        index = 0
        length = len(text)

        while index < length:
            char = text[index]
            following = text[index + 1] if index + 1 < length else ""

            if quote is not None:
                buffer.append(char)
                if char == quote:
                    quote = None
            elif char == "-" and following == "-":
                end = text.find("\n", index)
                end = length if end < 0 else end
                buffer.append(text[index:end])
                index = end
                continue
            elif char == "/" and following == "*":
                end = text.find("*/", index + 2)
                end = length if end < 0 else end + 2
                comment = text[index:end]
                buffer.append(comment)
                line += comment.count("\n")
                index = end
                continue
            elif char == ";":
                self._flush(buffer, start_line, statements)
                buffer = []
                start_line = None
                index += 1
                continue
            else:
                if char in self._closers:
                    quote = self._closers[char]
                if start_line is None and not char.isspace():
                    start_line = line
                buffer.append(char)

            if char == "\n":
                line += 1
            index += 1

        self._flush(buffer, start_line, statements)
        return statements

    @staticmethod
    def _flush(buffer: list[str], start_line: int | None, statements: list[SplitStatement]) -> None:
        if start_line is None:
            return
        statements.append(SplitStatement(sql="".join(buffer).strip(), line=start_line))
