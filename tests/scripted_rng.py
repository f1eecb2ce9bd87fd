"""Generator stand-in for tests that need an exact sequence of draws."""


class ScriptedRng:
    """
    Replays a fixed list of integer draws through `integers(low, high)`.

    Each draw must fall inside the requested range, and running out of
    values raises IndexError, so a test also pins how many draws were made.
    """

    def __init__(self, values):
        self.values = list(values)

    def integers(self, low, high=None):
        if high is None:
            low, high = 0, low
        value = self.values.pop(0)
        assert low <= value < high, f"scripted {value} outside [{low}, {high})"
        return value
