"""Versioned prompt template value type.

Each generation stage owns exactly one template. Calibration changes are
made by editing template text or the fields passed to ``render``, and by
bumping ``version`` so generated claims can be traced to the prompt that
produced them.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PromptTemplate:
    """
    A named, versioned prompt with an optional shared system instruction.

    Attributes:
        name: Stage identifier (e.g. "fact_extraction")
        version: Template revision, bumped on any wording change
        user: ``str.format`` template for the per-call prompt
        system: Instruction text shared across calls for this stage
    """

    name: str
    version: str
    user: str
    system: Optional[str] = None

    def render(self, **fields: object) -> str:
        """Fill the user template. Missing fields raise KeyError."""
        return self.user.format(**fields)

    @property
    def label(self) -> str:
        return f"{self.name}@{self.version}"
