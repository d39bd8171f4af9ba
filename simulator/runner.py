from dataclasses import dataclass

from simulator.machine import MachineIdentifier


@dataclass(frozen=True)
class RunResult:
    halted: bool
    accepted: bool
    steps: int
    identifier: MachineIdentifier

    @property
    def stopped(self):
        """False when the step budget ran out first."""
        return self.halted or self.accepted

    def to_dict(self):
        return {
            "halted": self.halted,
            "accepted": self.accepted,
            "steps": self.steps,
            "identifier": self.identifier.to_dict(),
        }


def run_bounded(machine, max_steps=0, on_step=None):
    """
    Drive ``machine.run_once()`` with a step budget (0 = unbounded).
    Stops like ``Machine.run`` (halt or final state). ``on_step(step,
    identifier)`` is called after every step taken.
    """
    steps = 0
    halted = False
    while not machine.is_final():
        if max_steps and steps >= max_steps:
            break
        if machine.run_once():
            halted = True
            break
        steps += 1
        if on_step is not None:
            on_step(steps, machine.identifier())

    return RunResult(
        halted=halted,
        accepted=machine.is_final(),
        steps=steps,
        identifier=machine.identifier(),
    )
