"""JSON formatter for Code Sprawl."""

import json

from ..models import RunResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the run result in its serialized contract form."""

    def render(self, result: RunResult) -> None:
        print(self.format(result))

    def format(self, result: RunResult) -> str:
        return json.dumps(result.to_dict(), indent=2)
