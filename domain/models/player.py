"""
Player domain model.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Player:
    """
    Represents a rated player on a team builder roster.

    This is a pure domain model with no infrastructure dependencies.
    Players are immutable; edits produce a new value via dataclasses.replace.
    """

    id: str
    name: str
    batting: int = 3
    bowling: int = 3
    captaincy: int = 3
    is_wicketkeeper: bool = False
    notes: str = ""

    @property
    def skill_total(self) -> int:
        """Combined batting + bowling, the value teams are balanced on."""
        return self.batting + self.bowling

    def has_notes(self) -> bool:
        return bool(self.notes and self.notes.strip())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "batting": self.batting,
            "bowling": self.bowling,
            "captaincy": self.captaincy,
            "is_wicketkeeper": self.is_wicketkeeper,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        """
        Build a Player from a dict.

        Accepts both ``is_wicketkeeper`` and the camelCase ``isWicketkeeper``
        key used by older exports.
        """
        if "is_wicketkeeper" in data:
            is_wicketkeeper = data["is_wicketkeeper"]
        else:
            is_wicketkeeper = data.get("isWicketkeeper", False)
        return cls(
            id=str(data["id"]),
            name=data["name"],
            batting=int(data.get("batting", 3)),
            bowling=int(data.get("bowling", 3)),
            captaincy=int(data.get("captaincy", 3)),
            is_wicketkeeper=bool(is_wicketkeeper),
            notes=data.get("notes") or "",
        )

    def __str__(self) -> str:
        wk = ", WK" if self.is_wicketkeeper else ""
        return f"{self.name} (Bat {self.batting}, Bowl {self.bowling}, Capt {self.captaincy}{wk})"
