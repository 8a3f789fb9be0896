"""GraphQL query builder for similarity search."""

from __future__ import annotations

import json
from typing import Sequence

DEFAULT_LIMIT = 20
DEFAULT_DISTANCE = 0.9


def build_query(
    search_query: str,
    class_name: str,
    fields: Sequence[str],
    *,
    limit: int = DEFAULT_LIMIT,
    distance: float = DEFAULT_DISTANCE,
) -> str:
    """Render a ``Get`` query that ranks ``class_name`` objects by ``nearText``."""
    concept = json.dumps(search_query)
    fields_query = "\n".join(fields)

    return f"""{{
            Get {{
                {class_name} (nearText: {{
                    concepts: [{concept}],
                    distance: {distance}
                }},
                limit: {limit}) {{
                    {fields_query}
                }}
            }}
        }}"""


__all__ = ["build_query", "DEFAULT_LIMIT", "DEFAULT_DISTANCE"]
