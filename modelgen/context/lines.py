"""Indentation-aware line accumulator used by the language helpers."""


class LinesBuilder:
    """
    Collects lines of generated code, each at an explicit indentation level.

        lb = LinesBuilder()
        lb.append(1, "public override string ToString()")
        lb.append(1, "{")
        lb.append(2, "return \"x\";")
        lb.append(1, "}")
        str(lb)   # every line indented and terminated by "\\n"
    """

    DEFAULT_INDENTATION = "    "

    def __init__(self, indentation: str = None):
        self.indentation = self.DEFAULT_INDENTATION if indentation is None else indentation
        self._lines: list[tuple[int, str]] = []

    def append(self, level: int, text: str) -> "LinesBuilder":
        if level < 0:
            raise ValueError(f"indentation level must be >= 0, got {level}")
        self._lines.append((level, text))
        return self

    def __len__(self):
        return len(self._lines)

    def lines(self) -> list[str]:
        return [self.indentation * level + text for level, text in self._lines]

    def __str__(self):
        return "".join(line + "\n" for line in self.lines())
