from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_COMMENT_AUTHOR = "Cliente"


@dataclass
class ProductQueryCommand:
    category: Optional[str]
    query: Optional[str]

    @staticmethod
    def from_raw(params: Mapping[str, Any]):
        category = (params.get("category") or "").strip() or None
        query = params.get("q") or params.get("search") or ""
        query = str(query).strip() or None
        return ProductQueryCommand(category=category, query=query)


@dataclass
class CommentCreateCommand:
    name: str
    text: str

    @staticmethod
    def from_raw(raw: Mapping[str, Any]):
        if not isinstance(raw, Mapping):
            return None
        text = str(raw.get("text") or "").strip()
        if not text:
            return None
        name = str(raw.get("name") or "").strip() or DEFAULT_COMMENT_AUTHOR
        return CommentCreateCommand(name=name, text=text)
