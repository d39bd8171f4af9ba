from collections import deque
from dataclasses import dataclass

from simulator.errors import MachineSyntaxError, NextStateNotFound, SyntaxErrorType
from simulator.model import MachineModel, StateModel, TransitionModel, load_model
from simulator.state import State
from simulator.tape import FrozenTape, Tape


@dataclass(frozen=True)
class MachineIdentifier:
    """Snapshot of a machine for printing, history and tests."""

    current_state: str
    tape: tuple

    def to_dict(self):
        return {
            "current_state": self.current_state,
            "tape": [t.to_dict() for t in self.tape],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            current_state=data["current_state"],
            tape=tuple(
                FrozenTape(t["tape"], t["head"], tuple(t["range"])) for t in data["tape"]
            ),
        )


class Machine:
    """
    Multi-tape Turing machine.

    The state graph is keyed by name and fixed after construction; only the
    current state and the tapes change while the machine runs.
    """

    def __init__(self, model):
        self.pattern_config = model.config

        states = {}
        for state_model in model.state:
            if state_model.name in states:
                raise MachineSyntaxError(
                    SyntaxErrorType.DUPLICATE_STATE,
                    f"state {state_model.name!r} is declared more than once",
                )
            states[state_model.name] = State.from_model(state_model, self.pattern_config)

        start_states = [s.name for s in states.values() if s.is_start]
        if len(start_states) != 1:
            raise MachineSyntaxError(
                SyntaxErrorType.START_STATE_ERROR,
                f"start state error: expected exactly one start state, found {start_states}",
            )

        arities = sorted({t.arity for s in states.values() for t in s.transitions})
        if len(arities) > 1:
            raise MachineSyntaxError(
                SyntaxErrorType.TAPE_COUNT_NOT_MATCH,
                f"transitions disagree on the number of tapes: {arities}",
            )

        self.states = states
        self.start_state = start_states[0]
        self.final_states = frozenset(s.name for s in states.values() if s.is_final)
        self.tape_count = arities[0] if arities else 1
        self.current_state = self.start_state
        self.tapes = []
        self.reset()

    @classmethod
    def from_str(cls, text, fmt):
        return cls(MachineModel.from_str(text, fmt))

    @classmethod
    def from_file(cls, path, ext=None):
        return cls(load_model(path, ext))

    def reset(self):
        """Back to the start state with blank tapes."""
        self.current_state = self.start_state
        self.tapes = [Tape() for _ in range(self.tape_count)]

    def input(self, text):
        """
        Load ``text`` onto the first tape; every other tape starts blank.
        Blank markers in the input become blank cells.
        """
        blank = self.pattern_config.empty
        first = Tape(text)
        first.cells = deque(None if symbol == blank else symbol for symbol in first.cells)
        self.tapes = [first] + [Tape() for _ in range(self.tape_count - 1)]

    def find_transition(self):
        state = self.states.get(self.current_state)
        if state is None:
            raise NextStateNotFound(self.current_state)
        return state.find_transition([tape.read() for tape in self.tapes])

    def run_once(self):
        """
        Advance one step. Returns True when no transition matches (the
        machine has halted and nothing was changed), False otherwise.
        Raises NextStateNotFound when the chosen transition targets an
        unknown state; the machine is left untouched in that case.
        """
        transition = self.find_transition()
        if transition is None:
            return True

        if transition.next_state not in self.states:
            raise NextStateNotFound(transition.next_state)

        blank = self.pattern_config.empty
        for tape, pattern, cons, prod, direction in zip(
            self.tapes,
            transition.patterns,
            transition.consume,
            transition.produce,
            transition.direction,
        ):
            if not pattern.keeps(cons, prod):
                if prod == blank:
                    tape.write_blank()
                else:
                    tape.write(prod)
            tape.move_to(direction)

        self.current_state = transition.next_state
        return False

    def run(self):
        """
        Step until the machine halts or enters a final state. Returns True
        when it stopped in a final state. A final state is never stepped out
        of, even when it has matching transitions (run_once still steps it).
        There is no step limit; use simulator.runner.run_bounded for that.
        """
        while not self.is_final():
            if self.run_once():
                break
        return self.is_final()

    def is_final(self):
        return self.current_state in self.final_states

    def identifier(self):
        blank = self.pattern_config.empty
        return MachineIdentifier(
            current_state=self.current_state,
            tape=tuple(tape.freeze(blank) for tape in self.tapes),
        )

    def model(self):
        """Project the machine back into the serialisable model."""
        return MachineModel(
            state=[
                StateModel(
                    name=state.name,
                    start=state.is_start,
                    final=state.is_final,
                    trans=[TransitionModel(**t.to_dict()) for t in state.transitions],
                )
                for state in self.states.values()
            ],
            config=self.pattern_config,
        )

    def __repr__(self):
        return (
            f"Machine(states={len(self.states)}, tapes={self.tape_count}, "
            f"current={self.current_state!r})"
        )
