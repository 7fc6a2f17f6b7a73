"""Data model for a registered team."""

# TourneyKit
# Copyright (C) 2025  TourneyKit developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Any, Dict

from tourneykit.type_hints import TeamId
from tourneykit.utils import generate_id


@dataclass
class Team:
    """A named competitor.

    Attributes:
        name: Display name, trimmed, stored with original casing
        id: Opaque identifier, assigned once at creation
    """

    name: str
    id: TeamId = field(default_factory=lambda: generate_id("team"))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        team_id = data["id"]
        if isinstance(team_id, bool) or not isinstance(team_id, (str, int)):
            raise TypeError(f"Team id must be a string or number: {team_id!r}")
        name = data["name"]
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Team name must be a non-empty string: {name!r}")
        return cls(name=name.strip(), id=team_id)
