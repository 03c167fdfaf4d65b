"""Errors raised by the mesh generator."""


class DegenerateResolutionError(ValueError):
    """A segment was configured with too few rings or too few vertices per ring."""

    def __init__(self, segment: str, vertical_steps: int, horizontal_steps: int) -> None:
        self.segment = segment
        self.vertical_steps = vertical_steps
        self.horizontal_steps = horizontal_steps
        super().__init__(
            f"{segment}: resolution {vertical_steps}x{horizontal_steps} is degenerate. "
            f"'vertical_steps' must be >= 2 and 'horizontal_steps' must be >= 3."
        )


class MeshIntegrityError(RuntimeError):
    """Vertex/normal alignment or face indexing was violated."""


class ObjParseError(ValueError):
    """An OBJ document could not be read as a triangle mesh with vertex normals."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")
