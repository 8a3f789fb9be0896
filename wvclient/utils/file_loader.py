import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

logger = logging.getLogger("wvclient")

Item = Union[str, Dict[str, Any]]


def load_items(path: Union[str, Path]) -> List[Item]:
    """Load ingest items from a ``.json``, ``.jsonl`` or plain text file.

    JSON files may hold a list of items or an object with an ``objects`` list.
    JSON Lines files hold one item per line. Any other file is read as text
    with one string item per non-blank line.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file does not exist: {path}")

    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    if suffix == ".json":
        items = _load_json(text, path)
    elif suffix in {".jsonl", ".ndjson"}:
        items = _load_json_lines(text, path)
    else:
        items = [line.strip() for line in text.splitlines() if line.strip()]

    logger.debug("Loaded %d items from %s", len(items), path)
    return items


def _load_json(text: str, path: Path) -> List[Item]:
    data = json.loads(text)
    if isinstance(data, dict) and "objects" in data:
        data = data["objects"]
    if isinstance(data, (str, dict)):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of items in {path}")
    return [_check_item(item, path) for item in data]


def _load_json_lines(text: str, path: Path) -> List[Item]:
    items: List[Item] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON on line {line_number} of {path}: {exc.msg}") from exc
        items.append(_check_item(item, path))
    return items


def _check_item(item: Any, path: Path) -> Item:
    if isinstance(item, (str, dict)):
        return item
    raise ValueError(f"Unsupported item type {type(item).__name__} in {path}")
