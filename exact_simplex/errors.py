class InvariantViolation(RuntimeError):
    """Raised when the engine builds a structure it should never build.

    Infeasible and unbounded problems are ordinary results; this signals a bug.
    """


class IterationLimitExceeded(RuntimeError):
    def __init__(self, iterations: int):
        super().__init__(f"simplex did not terminate within {iterations} pivots")
        self.iterations = iterations
