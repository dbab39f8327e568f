# normalize/schema.py
from dataclasses import dataclass
from typing import List, Optional

from ..config import MISSING_MARKER

RECORD_HEADERS = ["Refran", "Significado", "Uso"]


@dataclass(frozen=True)
class Record:
    slug: str
    idiom: str = MISSING_MARKER
    usage: str = MISSING_MARKER
    definition: str = MISSING_MARKER
    error: Optional[BaseException] = None   # fetch failure, sections left blank

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def is_empty(self) -> bool:
        return (
            self.error is None
            and self.idiom == MISSING_MARKER
            and self.definition == MISSING_MARKER
            and self.usage == MISSING_MARKER
        )

    def to_row(self) -> List[str]:
        # Column order matches RECORD_HEADERS.
        return [self.idiom, self.definition, self.usage]
