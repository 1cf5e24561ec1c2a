import logging
import re
from typing import ClassVar

from sql_review.domain import Dialect, DialectGuess

logger = logging.getLogger(__name__)

MIN_SIGNATURE_MATCHES = 2


class DialectIdentifier:
    """Scores SQL text against per-dialect syntax signatures.

    A dialect wins only with a strictly highest count of at least
    ``MIN_SIGNATURE_MATCHES`` matching signatures; anything else is generic.
    """

    _signatures: ClassVar[dict[Dialect, list[tuple[re.Pattern[str], str]]]] = {
        Dialect.MYSQL: [
            (re.compile(r"`[^`\n]+`"), "backtick identifier"),
            (re.compile(r"\bLIMIT\s+\d+\s*,\s*\d+", re.IGNORECASE), "LIMIT offset, count"),
            (re.compile(r"\bLIMIT\s+\d+\s*;?\s*$", re.IGNORECASE), "trailing LIMIT n"),
            (re.compile(r"\bAUTO_INCREMENT\b", re.IGNORECASE), "AUTO_INCREMENT"),
            (re.compile(r"\bENGINE\s*=\s*\w+", re.IGNORECASE), "ENGINE="),
            (re.compile(r"\bGROUP_CONCAT\s*\(", re.IGNORECASE), "GROUP_CONCAT"),
            (re.compile(r"\bDATE_FORMAT\s*\(", re.IGNORECASE), "DATE_FORMAT"),
            (re.compile(r"\bIFNULL\s*\(", re.IGNORECASE), "IFNULL"),
            (re.compile(r"\bON\s+DUPLICATE\s+KEY\s+UPDATE\b", re.IGNORECASE), "ON DUPLICATE KEY UPDATE"),
        ],
        Dialect.POSTGRESQL: [
            (re.compile(r"\bILIKE\b", re.IGNORECASE), "ILIKE"),
            (re.compile(r"\bRETURNING\b", re.IGNORECASE), "RETURNING"),
            (re.compile(r"::\s*[a-z_][a-z0-9_]*", re.IGNORECASE), "::type cast"),
            (re.compile(r"\bJSONB\b", re.IGNORECASE), "JSONB"),
            (re.compile(r"\$\d+"), "$n placeholder"),
            (re.compile(r"\b(?:BIG)?SERIAL\b", re.IGNORECASE), "SERIAL"),
            (re.compile(r"\bDISTINCT\s+ON\s*\(", re.IGNORECASE), "DISTINCT ON"),
            (re.compile(r"\bLIMIT\s+\d+\s+OFFSET\s+\d+", re.IGNORECASE), "LIMIT n OFFSET m"),
        ],
        Dialect.SQLSERVER: [
            (re.compile(r"\[[A-Za-z_][\w ]*\]"), "bracket identifier"),
            (re.compile(r"\bSELECT\s+(?:DISTINCT\s+)?TOP\s*\(?\s*\d+", re.IGNORECASE), "TOP n"),
            (re.compile(r"\bGETDATE\s*\(\s*\)", re.IGNORECASE), "GETDATE()"),
            (re.compile(r"\bNVARCHAR\b", re.IGNORECASE), "NVARCHAR"),
            (re.compile(r"\bIDENTITY\s*\(", re.IGNORECASE), "IDENTITY("),
            (re.compile(r"@@\w+"), "@@ system variable"),
            (re.compile(r"\bWITH\s*\(\s*NOLOCK\s*\)", re.IGNORECASE), "WITH (NOLOCK)"),
            (re.compile(r"\bISNULL\s*\(", re.IGNORECASE), "ISNULL"),
        ],
        Dialect.ORACLE: [
            (re.compile(r"\bROWNUM\b", re.IGNORECASE), "ROWNUM"),
            (re.compile(r"\bFROM\s+DUAL\b", re.IGNORECASE), "DUAL"),
            (re.compile(r"\bNVL2?\s*\(", re.IGNORECASE), "NVL("),
            (re.compile(r"\bSYSDATE\b", re.IGNORECASE), "SYSDATE"),
            (re.compile(r"\bTO_DATE\s*\(", re.IGNORECASE), "TO_DATE"),
            (re.compile(r"\bDECODE\s*\(", re.IGNORECASE), "DECODE"),
            (re.compile(r"\bCONNECT\s+BY\b", re.IGNORECASE), "CONNECT BY"),
        ],
    }

    _comment_patterns: ClassVar[tuple[re.Pattern[str], ...]] = (
        re.compile(r"/\*.*?\*/", re.DOTALL),
        re.compile(r"--[^\n]*"),
    )

    def _strip_comments(self, sql: str) -> str:
        text = sql
        for pattern in self._comment_patterns:
            text = pattern.sub(" ", text)
        return text.strip()

    def identify(self, sql: str) -> DialectGuess:
        text = self._strip_comments(sql)

        scores = {
            dialect: sum(1 for pattern, _ in signatures if pattern.search(text))
            for dialect, signatures in self._signatures.items()
        }
        best = max(scores.values(), default=0)
        leaders = [dialect for dialect, score in scores.items() if score == best]

        if best < MIN_SIGNATURE_MATCHES or len(leaders) > 1:
            return DialectGuess(dialect=Dialect.GENERIC, match_score=best)
        return DialectGuess(dialect=leaders[0], match_score=best)

    def matched_signatures(self, sql: str, dialect: Dialect) -> list[str]:
        """Names of the signatures of ``dialect`` that match ``sql``."""
        text = self._strip_comments(sql)
        return [name for pattern, name in self._signatures.get(dialect, []) if pattern.search(text)]

    def resolve(self, sql: str, hint: Dialect | None = None) -> DialectGuess:
        """Honor an explicit hint outright, otherwise identify from the text."""
        if hint is not None:
            return DialectGuess(dialect=hint, match_score=0)
        guess = self.identify(sql)
        logger.debug("Identified dialect %s (score %d)", guess.dialect, guess.match_score)
        return guess
