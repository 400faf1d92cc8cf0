"""Repository-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoRef:
    """Owner/name pair identifying a GitHub repository."""

    owner: str
    name: str

    @classmethod
    def parse(cls, value: str) -> "RepoRef":
        """
        Parse an ``owner/name`` string.

        Raises:
            ValueError: If the value is not of the form ``owner/name``
        """
        parts = value.strip().split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Expected repository as 'owner/name', got {value!r}")
        return cls(owner=parts[0], name=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name
