from dataclasses import dataclass

@dataclass(slots=True)
class KeyboardCursor:
    """Tile index focused for keyboard play."""
    index: int = 0
    visible: bool = False
