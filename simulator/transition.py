from simulator.errors import MachineSyntaxError, SyntaxErrorType
from simulator.pattern import DEFAULT_PATTERN_CONFIG
from simulator.tape import Direction


def parse_directions(move, cons="", prod=""):
    """Parse a move string such as "RLs" into Directions (case-insensitive)."""
    directions = []
    for c in move:
        if c not in "LRSlrs":
            raise MachineSyntaxError(
                SyntaxErrorType.TRANSITION_DIRECTION_NOT_FOUND,
                f"Transition `{cons}` -> `{prod}` direction `{c}` not found",
            )
        directions.append(Direction(c.upper()))
    return tuple(directions)


class Transition:
    """
    One rule: per-tape consume pattern, produce symbol and head move, plus
    the name of the state to enter. The target is resolved by name when the
    transition fires, so it may reference states declared later (or never).
    """

    __slots__ = ("consume", "produce", "direction", "next_state", "patterns")

    def __init__(self, consume, produce, direction, next_state, patterns):
        self.consume = consume
        self.produce = produce
        self.direction = direction
        self.next_state = next_state
        self.patterns = patterns

    @classmethod
    def parse(cls, cons, prod, move, next_state, config=DEFAULT_PATTERN_CONFIG):
        if len(cons) != len(prod):
            raise MachineSyntaxError(
                SyntaxErrorType.TRANSITION_CONSUME_PRODUCE_NOT_MATCH,
                f"Transition `{cons}` -> `{prod}` consume and produce symbols not match",
            )
        if not cons:
            raise MachineSyntaxError(
                SyntaxErrorType.TRANSITION_CONSUME_PRODUCE_NOT_MATCH,
                f"Transition to `{next_state}` consumes no symbols",
            )
        direction = parse_directions(move, cons, prod)
        if len(direction) != len(cons):
            raise MachineSyntaxError(
                SyntaxErrorType.TRANSITION_CONSUME_PRODUCE_NOT_MATCH,
                f"Transition `{cons}` -> `{prod}` consume do not match move direction `{move}`",
            )
        return cls(tuple(cons), tuple(prod), direction, next_state, config.parse(cons))

    @property
    def arity(self):
        return len(self.consume)

    @property
    def wildcard_count(self):
        return sum(1 for p in self.patterns if p.is_wildcard)

    def matches(self, symbols):
        """True when every tape's read symbol fits its consume pattern."""
        return all(p.matches(s) for p, s in zip(self.patterns, symbols))

    def to_dict(self):
        return {
            "cons": "".join(self.consume),
            "prod": "".join(self.produce),
            "move": "".join(d.value for d in self.direction),
            "next": self.next_state,
        }

    def __repr__(self):
        d = self.to_dict()
        return f"Transition({d['cons']!r} -> {d['prod']!r} {d['move']} {d['next']})"
