"""AI commentary on weather snapshots."""

from .gemini import InsightGenerator, build_genai_client, build_insight_prompt

__all__ = ["InsightGenerator", "build_genai_client", "build_insight_prompt"]
