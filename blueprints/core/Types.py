from enum import Enum


class PortDirection(Enum):
    INPUT = "in"
    OUTPUT = "out"


class BlockKind(Enum):
    START = "start"     # entry
    SELECT = "select"   # read
    LOOP = "loop"       # iterate
    IF = "if"           # branch
    WRITE = "write"     # emit

    @staticmethod
    def parse(value: str) -> "BlockKind":
        try:
            return BlockKind(value)
        except ValueError:
            raise ValueError(f"Unknown block kind '{value}'") from None
