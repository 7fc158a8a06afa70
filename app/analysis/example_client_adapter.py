"""Offline analysis client adapter.

Returns a fixed analysis wrapped the way chatty models often answer: a
sentence of prose and a fenced JSON block. Useful for local development
and end-to-end runs without an API key.
"""

import json
from typing import ClassVar

from app.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Adapter that answers every prompt with the same valid analysis."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Experienced professional with a solid, well-presented track record.",
        "strengths": ["Clear structure", "Relevant experience", "Quantified results"],
        "suggestion": "Add a short skills section tailored to the target role.",
        "overallScore": 75,
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        max_tokens: int,
        user_prompt: str,
        json_schema: dict[str, object] | None,
    ) -> str:
        _ = model, temperature, top_p, max_tokens, user_prompt, json_schema
        body = json.dumps(self.DEFAULT_RESPONSE, indent=2)
        return f"Here is the analysis:\n```json\n{body}\n```"
