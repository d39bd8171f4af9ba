from simulator.pattern import DEFAULT_PATTERN_CONFIG
from simulator.transition import Transition


class State:
    def __init__(self, name, is_start=False, is_final=False, transitions=()):
        self.name = name
        self.is_start = is_start
        self.is_final = is_final
        self.transitions = tuple(transitions)

    @classmethod
    def from_model(cls, state_model, config=DEFAULT_PATTERN_CONFIG):
        """Build a State from a StateModel, validating every transition."""
        transitions = [
            Transition.parse(t.cons, t.prod, t.move, t.next, config)
            for t in state_model.trans
        ]
        return cls(state_model.name, state_model.start, state_model.final, transitions)

    def find_transition(self, symbols):
        """
        Pick the transition to fire for the symbols under the heads.
        The most specific match wins (fewest wildcard positions); ties go to
        the first declared. Returns None when nothing matches (halt).
        """
        candidates = [t for t in self.transitions if t.matches(symbols)]
        if not candidates:
            return None
        return min(candidates, key=lambda t: t.wildcard_count)

    def __repr__(self):
        flags = "".join(f for f, on in (("S", self.is_start), ("F", self.is_final)) if on)
        return f"State({self.name!r}{', ' + flags if flags else ''}, {len(self.transitions)} transitions)"
