"""Base class for sifter agents that turn fetched content into quiz material.

Sifters are the LLM-backed analytical stages of the pipeline:
- FactExtractionAgent: RawArticle -> ExtractedFact objects
- ClaimSynthesisAgent: ExtractedFact -> CandidateClaimPair

All sifters inherit from this base class and implement the sift() method.
"""

from abc import abstractmethod

from newsquiz_system.agents.base_agent import BaseAgent


class BaseSifter(BaseAgent):
    """
    Abstract base for sifter agents.

    The process() method routes to the abstract sift() method, which
    subclasses implement.

    Attributes:
        processed_count: Number of successfully processed items.
        error_count: Number of failed backend calls or unparseable responses.
    """

    def __init__(self, name: str, description: str = ""):
        super().__init__(name=name, description=description)
        self.processed_count: int = 0
        self.error_count: int = 0

    @abstractmethod
    async def sift(self, content: dict) -> list[dict]:
        """
        Process content and return structured output as dicts.

        Args:
            content: Input dict. Expected keys vary by sifter type:
                - FactExtractionAgent: 'article'
                - ClaimSynthesisAgent: 'fact', 'article', 'guidance'
        """
        pass

    async def process(self, input_data: dict) -> dict:
        """
        BaseAgent.process implementation routing to sift().

        Args:
            input_data: Dict with 'content' key containing data to process.

        Returns:
            Dict with success flag, results and count
        """
        results = await self.sift(input_data.get("content", {}))
        return {
            "success": True,
            "results": results,
            "count": len(results),
        }

    def get_capabilities(self) -> list[str]:
        return ["sifting", "analysis"]

    def get_stats(self) -> dict:
        """
        Return processing statistics.

        Returns:
            Dict with processed_count, error_count, and error_rate.
        """
        total = self.processed_count + self.error_count
        error_rate = self.error_count / total if total > 0 else 0.0
        return {
            "processed_count": self.processed_count,
            "error_count": self.error_count,
            "error_rate": error_rate,
        }
