from enum import StrEnum, Enum, auto


class Solver(StrEnum):
    BNB = "BnB"  # Reduced-matrix branch-and-bound
    GREEDY = "Greedy"  # Nearest-neighbor construction


class QueueKind(StrEnum):
    AUTO = "auto"
    HEAP = "heap"
    ARRAY = "array"


class Difficulty(Enum):
    EASY = auto()
    NORMAL = auto()
    HARD = auto()


DEFAULT_TIME_LIMIT_MS = 60_000
DEFAULT_REDUCTION_EPS = 0.01

# Below this many cities the linear-scan frontier beats the heap
HEAP_QUEUE_THRESHOLD = 10

# Fraction of edges removed from HARD random scenarios
HARD_EDGE_DROP_FRACTION = 0.2

# Search budget left when seeding already spent the whole time limit
MIN_SEARCH_TIME_MS = 1e-6
