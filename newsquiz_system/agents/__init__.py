"""Agents for the claim-generation pipeline.

Crawlers acquire raw articles from feeds; sifters turn articles into facts,
facts into claim pairs, and reported claims into feedback guidance.
"""

from newsquiz_system.agents.base_agent import BaseAgent

__all__ = ["BaseAgent"]
