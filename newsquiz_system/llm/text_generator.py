"""Interface for text-generation backends."""

from typing import Optional, Protocol


class TextGenerator(Protocol):
    """A black-box ``generate(prompt) -> text`` backend."""

    async def generate(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """Return free-form text for ``prompt``. May raise on transport failure."""
        ...
