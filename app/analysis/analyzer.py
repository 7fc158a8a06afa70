"""AI-powered resume analyzer."""

import json
from pathlib import Path

from app.analysis.base import BaseAnalyzer
from app.analysis.client_base import BaseAnalysisClient
from app.analysis.exceptions import AnalysisError
from app.analysis.models import AnalysisPayload
from app.analysis.prompt_loader import load_json_schema, load_prompt_template
from app.analysis.response_parser import extract_json_object
from app.analysis.validator import validate_and_build
from app.logging.logger import Log

DEFAULT_MAX_INPUT_CHARS = 15000


class Analyzer(BaseAnalyzer):
    """Analyzes resume text with a generative model and validates the answer."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.1,
        top_p: float = 0.1,
        max_tokens: int = 2048,
        max_input_chars: int = DEFAULT_MAX_INPUT_CHARS,
        structured_output: bool = True,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._top_p = top_p
        self._max_tokens = max_tokens
        self._max_input_chars = max_input_chars
        self._structured_output = structured_output
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(self._json_schema)

    def analyze(self, text: str) -> AnalysisPayload:
        """Analyze resume text and return the validated payload."""
        if not text or not text.strip():
            raise AnalysisError("Resume text is required for analysis")

        prompt = self._build_prompt(self._truncate(text))
        Log.debug(f"Analysis prompt:\n{prompt}")

        raw_response = self._call_ai(prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        parsed = extract_json_object(raw_response)
        payload = validate_and_build(parsed)

        Log.info(f"Analysis complete: score {payload.overall_score}")
        return payload

    def _truncate(self, text: str) -> str:
        if len(text) <= self._max_input_chars:
            return text
        Log.warning(
            f"Resume text truncated from {len(text)} to {self._max_input_chars} chars"
        )
        return text[: self._max_input_chars]

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            document_text=text,
            json_schema=self._json_schema,
        )

    def _call_ai(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            top_p=self._top_p,
            max_tokens=self._max_tokens,
            user_prompt=prompt,
            json_schema=self._json_schema_dict if self._structured_output else None,
        )
