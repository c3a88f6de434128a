# mazerun/counter.py


class StepCounter:
    """Number of cells processed by the current search run."""

    def __init__(self, value: int = 0):
        self.value = value

    def increment(self) -> int:
        self.value += 1
        return self.value

    def reset(self) -> None:
        self.value = 0

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"StepCounter({self.value})"
