"""Type hints used in TourneyKit."""

from typing import Any, Callable, Dict, List, Literal, Optional, Union

# Score entry side
Side = Literal["A", "B"]

# Raw score input: an int, a numeric string, or empty/None for "not played"
ScoreInput = Optional[Union[int, str]]

# Team identifiers are opaque; old snapshots carry numeric ids
TeamId = Union[str, int]

# Returns a new list holding the same participant names in some order
Shuffler = Callable[[List[str]], List[str]]

# JSON compatible session snapshot
Snapshot = Dict[str, Any]
