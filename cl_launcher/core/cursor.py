"""Selection cursor over the currently displayed result list."""


def clamp(current_index: int, new_list_length: int) -> int:
    """Keep ``current_index`` if it still points at a row, else go back to 0."""
    if current_index < 0 or current_index >= new_list_length:
        return 0
    return current_index


class SelectionCursor:
    """Index of the highlighted row.

    ``0 <= index < max(1, length)`` holds after every ``revalidate`` call,
    which callers must make whenever the filtered list is recomputed.
    """

    def __init__(self, index: int = 0):
        self.index = max(0, index)
        self.length = 0

    def revalidate(self, new_list_length: int) -> int:
        self.length = max(0, new_list_length)
        self.index = clamp(self.index, self.length)
        return self.index

    def reset(self) -> int:
        self.index = 0
        return self.index

    def select(self, index: int) -> int:
        self.index = clamp(index, self.length)
        return self.index

    def next(self) -> int:
        """Move down, wrapping to the first row."""
        if self.length:
            self.index = (self.index + 1) % self.length
        return self.index

    def previous(self) -> int:
        """Move up, wrapping to the last row."""
        if self.length:
            self.index = (self.index - 1) % self.length
        return self.index
