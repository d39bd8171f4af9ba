from dataclasses import dataclass
from enum import Enum

from simulator.errors import MachineSyntaxError, SyntaxErrorType


class PatternKind(Enum):
    LITERAL = "literal"
    REQUIRE_BLANK = "require_blank"
    REQUIRE_NON_BLANK = "require_non_blank"
    MATCH_ANY = "match_any"


@dataclass(frozen=True)
class SymbolPattern:
    kind: PatternKind
    literal: str = None

    def matches(self, symbol):
        """Test one read symbol (None = blank) against this pattern."""
        if self.kind is PatternKind.LITERAL:
            return symbol == self.literal
        if self.kind is PatternKind.REQUIRE_BLANK:
            return symbol is None
        if self.kind is PatternKind.REQUIRE_NON_BLANK:
            return symbol is not None
        return True

    @property
    def is_wildcard(self):
        return self.kind is not PatternKind.LITERAL

    def keeps(self, consume, produce):
        """True when the step must leave the cell untouched.

        A wildcard echoed unchanged in the produce string means "keep
        whatever was read"; literals are always written back.
        """
        return self.is_wildcard and consume == produce


@dataclass(frozen=True)
class PatternConfig:
    """Special characters recognised in consume strings."""

    empty: str = "_"
    some: str = "*"
    any: str = "."

    def __post_init__(self):
        chars = (self.empty, self.some, self.any)
        if not all(isinstance(c, str) and len(c) == 1 for c in chars):
            raise MachineSyntaxError(
                SyntaxErrorType.SYNTAX_NOT_VALID,
                f"pattern config characters must be single characters, got {chars!r}",
            )
        if len(set(chars)) != 3:
            raise MachineSyntaxError(
                SyntaxErrorType.SYNTAX_NOT_VALID,
                f"pattern config characters must be distinct, got {chars!r}",
            )

    def classify(self, char):
        if char == self.empty:
            return SymbolPattern(PatternKind.REQUIRE_BLANK)
        if char == self.some:
            return SymbolPattern(PatternKind.REQUIRE_NON_BLANK)
        if char == self.any:
            return SymbolPattern(PatternKind.MATCH_ANY)
        return SymbolPattern(PatternKind.LITERAL, char)

    def parse(self, consume):
        return tuple(self.classify(c) for c in consume)

    def to_dict(self):
        return {"empty": self.empty, "some": self.some, "any": self.any}


DEFAULT_PATTERN_CONFIG = PatternConfig()
