"""
Response parser for the travel advisor classifier.

Handles JSON extraction from model replies that may wrap the object in
markdown code fences or surround it with prose.
"""

import json
import re
from typing import Any, Dict

from pydantic import ValidationError

from nomad.advisor.schemas import TravelCategoryOutput


class ParseError(Exception):
    """Raised when a classifier reply cannot be parsed."""

    pass


def extract_json_from_response(raw_response: str) -> str:
    """
    Extract JSON content from a model reply.

    Handles:
    - Raw JSON
    - JSON in markdown code blocks (```json ... ```)
    - A JSON object preceded or followed by prose

    Args:
        raw_response: Raw reply text

    Returns:
        Cleaned JSON string ready for parsing
    """
    content = raw_response.strip()

    match = re.search(r"```(?:json)?\s*([\s\S]*?)```", content)
    if match:
        content = match.group(1).strip()

    start = content.find("{")
    if start == -1:
        return content

    # Find matching closing brace
    depth = 0
    for i in range(start, len(content)):
        if content[i] == "{":
            depth += 1
        elif content[i] == "}":
            depth -= 1
            if depth == 0:
                return content[start : i + 1]

    return content[start:]


def parse_classification(raw_response: str) -> TravelCategoryOutput:
    """
    Parse the classifier's reply into a TravelCategoryOutput.

    Raises:
        ParseError: If the reply is not JSON or does not match the schema
    """
    try:
        data: Dict[str, Any] = json.loads(extract_json_from_response(raw_response))
        return TravelCategoryOutput.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ParseError(f"Invalid classification response: {e}") from e
