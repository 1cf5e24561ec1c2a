import json
from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Any

from sql_review.domain import MergedReport


def _plain(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {_plain(key): _plain(value) for key, value in obj.items()}
    if isinstance(obj, list | tuple):
        return [_plain(item) for item in obj]
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.isoformat()
    return obj


def report_to_dict(report: MergedReport) -> dict[str, Any]:
    return _plain(asdict(report))


def report_to_json(report: MergedReport) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False)
