from enum import Enum


class SyntaxErrorType(Enum):
    TRANSITION_CONSUME_PRODUCE_NOT_MATCH = "transition_consume_produce_not_match"
    TRANSITION_DIRECTION_NOT_FOUND = "transition_direction_not_found"
    TAPE_COUNT_NOT_MATCH = "tape_count_not_match"
    DUPLICATE_STATE = "duplicate_state"
    SYNTAX_NOT_VALID = "syntax_not_valid"
    FORMAT_NOT_PROVIDED = "format_not_provided"
    START_STATE_ERROR = "start_state_error"


class MachineSyntaxError(ValueError):
    """Raised while building a machine from a model. No machine is produced."""

    def __init__(self, error_type, message, detail=None):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.detail = detail

    def __str__(self):
        if self.detail:
            return f"{self.error_type.name}: {self.message} ({self.detail})"
        return f"{self.error_type.name}: {self.message}"


class MachineRunningError(RuntimeError):
    """Raised while stepping a machine. Fatal to the current run only."""


class NextStateNotFound(MachineRunningError):
    def __init__(self, state_name):
        super().__init__(f"Next state not found: {state_name!r}")
        self.state_name = state_name
