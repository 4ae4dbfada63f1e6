"""Test doubles shared across the suite."""
from fulgere.render.canvas import SOURCE_OVER


class RecordingContext:
    """Drawing context that records path operations instead of drawing."""

    def __init__(self) -> None:
        self.line_width = 1.0
        self.stroke_color = (0, 0, 0, 255)
        self.fill_color = (0, 0, 0, 255)
        self.composite = SOURCE_OVER
        self.calls = []
        self._stack = []
        self._path = []

    def clear_rect(self, x, y, width, height) -> None:
        self.calls.append(("clear", (x, y, width, height)))

    def save(self) -> None:
        self._stack.append((self.line_width, self.stroke_color, self.fill_color, self.composite))

    def restore(self) -> None:
        self.line_width, self.stroke_color, self.fill_color, self.composite = self._stack.pop()

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x, y) -> None:
        self._path.append((x, y))

    def line_to(self, x, y) -> None:
        self._path.append((x, y))

    def close_path(self) -> None:
        pass

    def stroke(self) -> None:
        self.calls.append(("stroke", list(self._path), self.line_width, self.stroke_color, self.composite))

    def fill(self) -> None:
        self.calls.append(("fill", list(self._path), self.fill_color, self.composite))

    def of_kind(self, kind: str):
        return [call for call in self.calls if call[0] == kind]

